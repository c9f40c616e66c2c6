import json
from io import StringIO

import pytest
from django.core.management import call_command

from accounts.models import Business
from packs.models import VerticalPackVersion
from packs.rollout import resolve_pack_for_business


def _seed(*args):
    out = StringIO()
    call_command('seed_packs', *args, stdout=out)
    return json.loads(out.getvalue())


@pytest.mark.django_db
def test_seeds_every_builtin_pack_as_completed_v1():
    result = _seed()
    assert result == {'created': ['general', 'aesthetic', 'dealership'], 'skipped': []}

    dealership = VerticalPackVersion.objects.get(slug='dealership', version=1)
    assert dealership.name == 'Dealership'
    assert dealership.is_published is True
    assert dealership.rollout_stage == VerticalPackVersion.STAGE_COMPLETED
    assert dealership.rollout_percent == 100
    assert 'displayName' not in dealership.config
    assert dealership.config['kanbanEnabled'] is True


@pytest.mark.django_db
def test_seed_is_idempotent():
    _seed()
    result = _seed()
    assert result == {'created': [], 'skipped': ['general', 'aesthetic', 'dealership']}
    assert VerticalPackVersion.objects.count() == 3


@pytest.mark.django_db
def test_publish_only_leaves_rollout_to_the_console():
    _seed('--publish-only', '--pack', 'aesthetic')

    pv = VerticalPackVersion.objects.get(slug='aesthetic')
    assert pv.rollout_stage == VerticalPackVersion.STAGE_PUBLISHED
    assert pv.rollout_percent == 0
    assert VerticalPackVersion.objects.count() == 1

    biz = Business.objects.create(name='Glow', slug='glow', vertical_pack='aesthetic')
    assert resolve_pack_for_business(biz)['source'] == 'default'


@pytest.mark.django_db
def test_seeded_pack_resolves_through_rollout():
    _seed('--pack', 'dealership')
    biz = Business.objects.create(name='City Motors', slug='city-motors', vertical_pack='dealership')

    resolved = resolve_pack_for_business(biz)
    assert resolved['source'] == 'rollout'
    assert resolved['version'] == 1
    assert resolved['name'] == 'Dealership'
