from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.exceptions import NotFound

from accounts.models import Business
from console import skills
from console.models import PlatformAuditLog
from packs.models import AgentConfig


User = get_user_model()


class SkillsCatalogTests(TestCase):
    def setUp(self):
        self.d1 = Business.objects.create(name='Motors One', slug='motors-one', vertical_pack='dealership')
        self.d2 = Business.objects.create(name='Motors Two', slug='motors-two', vertical_pack='dealership')
        self.clinic = Business.objects.create(name='Glow', slug='glow', vertical_pack='aesthetic')

        AgentConfig.objects.create(business=self.d1, agent_type='WAITLIST', is_enabled=True)
        AgentConfig.objects.create(business=self.d2, agent_type='WAITLIST', is_enabled=False)
        AgentConfig.objects.create(business=self.clinic, agent_type='WAITLIST', is_enabled=True)

    def _skill(self, catalog, slug, agent_type):
        pack = next(p for p in catalog['packs'] if p['slug'] == slug)
        return next(s for s in pack['skills'] if s['agent_type'] == agent_type)

    def test_catalog_adoption_counts_per_pack(self):
        catalog = skills.get_catalog()

        waitlist = self._skill(catalog, 'dealership', 'WAITLIST')
        self.assertEqual(waitlist['name'], 'Service Waitlist')
        self.assertEqual(waitlist['business_count'], 2)
        self.assertEqual(waitlist['enabled_count'], 1)
        self.assertEqual(waitlist['adoption_percent'], 50)

        clinic_waitlist = self._skill(catalog, 'aesthetic', 'WAITLIST')
        self.assertEqual(clinic_waitlist['enabled_count'], 1)
        self.assertEqual(clinic_waitlist['adoption_percent'], 100)

        general = self._skill(catalog, 'general', 'WAITLIST')
        self.assertEqual(general['business_count'], 0)
        self.assertEqual(general['adoption_percent'], 0)

    def test_adoption_detail(self):
        detail = skills.get_skill_adoption('WAITLIST')
        self.assertEqual(detail['total_businesses'], 3)
        self.assertEqual(detail['enabled_count'], 2)
        self.assertEqual({c['business_slug'] for c in detail['configs']}, {'motors-one', 'motors-two', 'glow'})

        with self.assertRaises(NotFound):
            skills.get_skill_adoption('UNKNOWN')

    def test_platform_override_upserts_every_business(self):
        result = skills.platform_override('RETENTION', True)
        self.assertEqual(result['affected_count'], 3)
        self.assertEqual(AgentConfig.objects.filter(agent_type='RETENTION', is_enabled=True).count(), 3)

        skills.platform_override('WAITLIST', False)
        self.assertFalse(AgentConfig.objects.filter(agent_type='WAITLIST', is_enabled=True).exists())
        self.assertEqual(AgentConfig.objects.filter(agent_type='WAITLIST').count(), 3)

    def test_business_skills_merge_configs(self):
        by_type = {s['agent_type']: s for s in skills.get_business_skills(self.d2)}
        self.assertEqual(by_type['WAITLIST']['name'], 'Service Waitlist')
        self.assertFalse(by_type['WAITLIST']['is_enabled'])
        self.assertTrue(by_type['WAITLIST']['has_config'])
        self.assertTrue(by_type['RETENTION']['is_enabled'])
        self.assertFalse(by_type['RETENTION']['has_config'])
        self.assertEqual(by_type['RETENTION']['autonomy_level'], 'SUGGEST')

    def test_custom_pack_business_gets_general_skills(self):
        spa = Business.objects.create(name='Day Spa', slug='day-spa', vertical_pack='spa')
        by_type = {s['agent_type']: s for s in skills.get_business_skills(spa)}
        self.assertEqual(by_type['WAITLIST']['name'], 'Waitlist Matching')
        self.assertTrue(by_type['WAITLIST']['is_enabled'])
        self.assertFalse(by_type['RETENTION']['is_enabled'])

    def test_platform_override_unknown_type(self):
        with self.assertRaises(NotFound):
            skills.platform_override('UNKNOWN', True)


class SkillsApiTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(username='root', email='root@example.com', password='pw')
        self.user = User.objects.create_user(username='u1', email='u1@example.com', password='pw')
        Business.objects.create(name='Glow', slug='glow', vertical_pack='aesthetic')

    def test_catalog_requires_superuser(self):
        self.client.force_login(self.user)
        self.assertEqual(self.client.get('/api/v1/admin/skills-console/catalog/').status_code, 403)

        self.client.force_login(self.admin)
        resp = self.client.get('/api/v1/admin/skills-console/catalog/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual({p['slug'] for p in resp.json()['packs']}, {'general', 'aesthetic', 'dealership'})

    def test_adoption_unknown_type_404(self):
        self.client.force_login(self.admin)
        resp = self.client.get('/api/v1/admin/skills-console/NOPE/adoption/')
        self.assertEqual(resp.status_code, 404)

    def test_platform_override_endpoint(self):
        self.client.force_login(self.admin)
        url = '/api/v1/admin/skills-console/DATA_HYGIENE/platform-override/'

        resp = self.client.post(url, {'enabled': 'yes', 'reason': 'x'}, content_type='application/json')
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(url, {'enabled': True, 'reason': 'incident 42'}, content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['affected_count'], 1)

        entry = PlatformAuditLog.objects.get(action='SKILL_PLATFORM_OVERRIDE')
        self.assertEqual(entry.target_id, 'DATA_HYGIENE')
        self.assertEqual(entry.reason, 'incident 42')
        self.assertEqual(entry.metadata, {'enabled': True, 'affected_count': 1})

    def test_platform_override_reason_is_optional(self):
        self.client.force_login(self.admin)
        resp = self.client.post(
            '/api/v1/admin/skills-console/WAITLIST/platform-override/',
            {'enabled': False},
            content_type='application/json',
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['affected_count'], 1)

        entry = PlatformAuditLog.objects.get(action='SKILL_PLATFORM_OVERRIDE')
        self.assertEqual(entry.target_id, 'WAITLIST')
        self.assertEqual(entry.reason, '')
        self.assertEqual(entry.metadata, {'enabled': False, 'affected_count': 1})

    def test_console_views_are_audited(self):
        self.client.force_login(self.admin)
        self.assertEqual(self.client.get('/api/v1/admin/skills-console/catalog/').status_code, 200)
        self.assertEqual(self.client.get('/api/v1/admin/skills-console/WAITLIST/adoption/').status_code, 200)
        self.assertEqual(self.client.get('/api/v1/admin/platform-settings/').status_code, 200)

        actions = set(PlatformAuditLog.objects.values_list('action', flat=True))
        self.assertTrue({'SKILLS_CATALOG_VIEW', 'SKILL_ADOPTION_VIEW', 'SETTINGS_VIEW'} <= actions)

        adoption = PlatformAuditLog.objects.get(action='SKILL_ADOPTION_VIEW')
        self.assertEqual(adoption.target_type, 'SKILL')
        self.assertEqual(adoption.target_id, 'WAITLIST')

    def test_unknown_skill_adoption_is_not_audited(self):
        self.client.force_login(self.admin)
        self.assertEqual(self.client.get('/api/v1/admin/skills-console/NOPE/adoption/').status_code, 404)
        self.assertFalse(PlatformAuditLog.objects.filter(action='SKILL_ADOPTION_VIEW').exists())
