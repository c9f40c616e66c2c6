from __future__ import annotations

import json

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone


class Command(BaseCommand):
    help = 'Store every built-in vertical pack as version 1 (fully rolled out) when it does not exist yet'

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            '--publish-only',
            action='store_true',
            help='Leave newly created versions at "published" instead of completing their rollout.',
        )
        parser.add_argument('--pack', dest='packs', action='append', default=None, help='Only seed this pack (repeatable).')

    def handle(self, *args, **options) -> None:
        from packs.definitions import get_all_packs, get_pack, pack_config_from_definition
        from packs.models import VerticalPackVersion

        names = options.get('packs') or get_all_packs()
        publish_only = bool(options.get('publish_only'))

        created, skipped = [], []
        now = timezone.now()
        with transaction.atomic():
            for name in names:
                definition = get_pack(name)
                if VerticalPackVersion.objects.filter(slug=name).exists():
                    skipped.append(name)
                    continue

                fields = {
                    'slug': name,
                    'version': 1,
                    'name': definition['displayName'],
                    'description': definition.get('description'),
                    'config': pack_config_from_definition(name),
                    'is_published': True,
                    'published_at': now,
                    'rollout_stage': VerticalPackVersion.STAGE_PUBLISHED,
                }
                if not publish_only:
                    fields.update(
                        rollout_stage=VerticalPackVersion.STAGE_COMPLETED,
                        rollout_percent=100,
                        rollout_started_at=now,
                        rollout_completed_at=now,
                    )
                VerticalPackVersion.objects.create(**fields)
                created.append(name)

        self.stdout.write(json.dumps({'created': created, 'skipped': skipped}))
