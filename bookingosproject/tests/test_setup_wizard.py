from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from accounts.models import Business, Membership
from bookings.models import Service
from packs import builder, rollout
from packs.setup import apply_pack_to_business


User = get_user_model()


class ApplyPackTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username='owner', email='owner@example.com', password='pw')
        self.org = Business.objects.create(name='City Motors', slug='city-motors', owner=self.owner)

    def test_seeds_default_services_and_completes_setup(self):
        result = apply_pack_to_business(self.org, 'dealership')

        self.org.refresh_from_db()
        self.assertEqual(self.org.vertical_pack, 'dealership')
        self.assertTrue(self.org.setup_complete)
        self.assertEqual(result['pack']['source'], 'default')
        self.assertEqual(len(result['created_services']), 5)

        test_drive = Service.objects.get(organization=self.org, name='Test Drive')
        self.assertEqual(test_drive.duration, 30)
        self.assertEqual(test_drive.price, Decimal('0'))
        self.assertEqual(test_drive.kind, Service.KIND_CONSULT)
        self.assertEqual(test_drive.category, 'Sales')

    def test_existing_services_are_not_duplicated(self):
        Service.objects.create(organization=self.org, name='oil change', slug='custom-oil', duration=20, price=40)

        result = apply_pack_to_business(self.org, 'dealership')
        self.assertNotIn('Oil Change', result['created_services'])
        self.assertEqual(Service.objects.filter(organization=self.org).count(), 5)

        again = apply_pack_to_business(self.org, 'dealership')
        self.assertEqual(again['created_services'], [])

    def test_uses_rolled_out_version(self):
        pv = builder.create_pack(
            slug='spa',
            name='Day Spa',
            config={'defaultServices': [{'name': 'Massage', 'durationMins': 60, 'price': '89.50'}]},
        )
        builder.publish_pack(pv.id)
        rollout.start_or_advance_rollout('spa', 1, 100)

        result = apply_pack_to_business(self.org, 'spa')
        self.assertEqual(result['pack']['source'], 'rollout')
        self.assertEqual(result['created_services'], ['Massage'])
        massage = Service.objects.get(organization=self.org, name='Massage')
        self.assertEqual(massage.price, Decimal('89.50'))
        self.assertEqual(massage.kind, Service.KIND_OTHER)


class TenantPackApiTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username='owner', email='owner@example.com', password='pw')
        self.staff = User.objects.create_user(username='staff', email='staff@example.com', password='pw')
        self.outsider = User.objects.create_user(username='out', email='out@example.com', password='pw')
        self.org = Business.objects.create(name='Glow', slug='glow', owner=self.owner, vertical_pack='aesthetic')
        Membership.objects.create(user=self.owner, organization=self.org, role='owner', is_active=True)
        Membership.objects.create(user=self.staff, organization=self.org, role='staff', is_active=True)

    def test_business_pack_requires_membership(self):
        resp = self.client.get(f'/api/v1/business/pack/?org={self.org.slug}')
        self.assertEqual(resp.status_code, 401)

        self.client.force_login(self.outsider)
        resp = self.client.get(f'/api/v1/business/pack/?org={self.org.slug}')
        self.assertEqual(resp.status_code, 400)

        self.client.force_login(self.staff)
        resp = self.client.get('/api/v1/business/pack/')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('org', resp.json())

    def test_business_pack_resolves_for_member(self):
        self.client.force_login(self.staff)
        resp = self.client.get(f'/api/v1/business/pack/?org={self.org.id}')
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body['org']['slug'], 'glow')
        self.assertEqual(body['pack']['slug'], 'aesthetic')
        self.assertEqual(body['pack']['source'], 'default')
        self.assertEqual(body['pack']['config']['labels']['customer'], 'Patient')

        skills = {s['agent_type']: s for s in body['skills']}
        self.assertEqual(skills['RETENTION']['name'], 'Patient Retention')
        self.assertTrue(skills['RETENTION']['is_enabled'])
        self.assertFalse(skills['DATA_HYGIENE']['is_enabled'])

    def test_apply_pack_owner_only(self):
        url = f'/api/v1/setup/apply-pack/?org={self.org.slug}'

        self.client.force_login(self.staff)
        resp = self.client.post(url, {'pack': 'aesthetic'}, content_type='application/json')
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(Service.objects.exists())

        self.client.force_login(self.owner)
        resp = self.client.post(url, {'pack': 'no-such-pack'}, content_type='application/json')
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(url, {'pack': 'aesthetic'}, content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body['org']['setup_complete'])
        self.assertEqual(body['created_services'], ['Consultation', 'Botox', 'Dermal Filler', 'Chemical Peel'])
        self.assertEqual(Service.objects.filter(organization=self.org).count(), 4)

    def test_draft_only_custom_pack_is_not_applicable(self):
        builder.create_pack(slug='spa', name='Day Spa')
        self.client.force_login(self.owner)
        resp = self.client.post(
            f'/api/v1/setup/apply-pack/?org={self.org.slug}', {'pack': 'spa'}, content_type='application/json'
        )
        self.assertEqual(resp.status_code, 400)
