import pytest
from rest_framework.exceptions import NotFound

from packs.definitions import (
    PACK_SKILLS,
    default_pack_config,
    find_skill,
    get_all_packs,
    get_pack,
    pack_config_from_definition,
    skills_for_pack,
)


def test_all_packs_listed_in_order():
    assert get_all_packs() == ['general', 'aesthetic', 'dealership']


def test_unknown_pack_raises_not_found():
    with pytest.raises(NotFound):
        get_pack('nonexistent')


def test_get_pack_returns_independent_copy():
    pack = get_pack('aesthetic')
    pack['labels']['customer'] = 'Changed'
    assert get_pack('aesthetic')['labels']['customer'] != 'Changed'


def test_aesthetic_intake_fields():
    pack = get_pack('aesthetic')
    keys = [f['key'] for f in pack['intakeFields']]
    assert keys == [
        'isMedicalFlagged',
        'allergies',
        'concernArea',
        'desiredTreatment',
        'budget',
        'preferredProvider',
        'contraindications',
    ]
    budget = next(f for f in pack['intakeFields'] if f['key'] == 'budget')
    assert budget['type'] == 'select'
    assert len(budget['options']) == 4


def test_dealership_pack_shape():
    pack = get_pack('dealership')
    assert pack['labels'] == {'customer': 'Client', 'booking': 'Appointment', 'service': 'Service'}

    fields = {f['key']: f for f in pack['intakeFields']}
    assert list(fields) == ['make', 'model', 'year', 'vin', 'mileage', 'interestType']
    assert fields['make']['required'] is True
    assert fields['model']['required'] is True
    assert fields['year']['type'] == 'number'
    assert fields['mileage']['type'] == 'number'
    assert fields['interestType']['options'] == ['New', 'Used', 'Trade-in', 'Service']

    services = pack['defaultServices']
    assert [s['name'] for s in services] == [
        'Test Drive',
        'Routine Maintenance',
        'Brake Service',
        'Oil Change',
        'Diagnostic Check',
    ]
    test_drive = services[0]
    assert test_drive['durationMins'] == 30
    assert test_drive['price'] == 0
    assert test_drive['kind'] == 'CONSULT'

    assert len(pack['defaultTemplates']) == 10
    assert pack['kanbanEnabled'] is True
    assert pack['kanbanStatuses'] == [
        'CHECKED_IN',
        'DIAGNOSING',
        'AWAITING_APPROVAL',
        'IN_PROGRESS',
        'READY_FOR_PICKUP',
    ]


def test_default_pack_config_is_blank():
    config = default_pack_config()
    assert config['labels'] == {'customer': 'Customer', 'booking': 'Booking', 'service': 'Service'}
    assert config['intakeFields'] == []
    assert config['defaultServices'] == []
    assert config['kanbanEnabled'] is False


def test_config_from_definition_strips_identity_keys():
    config = pack_config_from_definition('dealership')
    for key in ('name', 'displayName', 'description'):
        assert key not in config
    assert config['kanbanEnabled'] is True


def test_skill_catalogue():
    assert set(PACK_SKILLS) == {'general', 'aesthetic', 'dealership'}
    for skills in PACK_SKILLS.values():
        assert [s['agent_type'] for s in skills] == [
            'WAITLIST',
            'RETENTION',
            'DATA_HYGIENE',
            'SCHEDULING_OPTIMIZER',
            'QUOTE_FOLLOWUP',
        ]

    assert find_skill('QUOTE_FOLLOWUP')['category'] == 'reactive'
    assert find_skill('NOPE') is None
    assert skills_for_pack('custom-pack') == PACK_SKILLS['general']
