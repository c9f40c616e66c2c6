from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase

from console.models import PlatformAuditLog
from packs.models import VerticalPackVersion


User = get_user_model()


class PackBuilderApiTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(username='root', email='root@example.com', password='pw')
        self.user = User.objects.create_user(username='u1', email='u1@example.com', password='pw')

    def _create(self, **overrides):
        payload = {'slug': 'spa', 'name': 'Day Spa', 'description': 'Spas and wellness'}
        payload.update(overrides)
        return self.client.post('/api/v1/admin/pack-builder/', payload, content_type='application/json')

    def test_requires_superuser(self):
        resp = self.client.get('/api/v1/admin/pack-builder/')
        self.assertEqual(resp.status_code, 401)

        self.client.force_login(self.user)
        resp = self._create()
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(VerticalPackVersion.objects.exists())

    def test_create_and_fetch(self):
        self.client.force_login(self.admin)
        resp = self._create()
        self.assertEqual(resp.status_code, 201)
        pack = resp.json()['pack']
        self.assertEqual(pack['slug'], 'spa')
        self.assertEqual(pack['version'], 1)
        self.assertEqual(pack['rollout_stage'], 'draft')
        self.assertEqual(pack['config']['labels']['customer'], 'Customer')

        resp = self.client.get(f"/api/v1/admin/pack-builder/{pack['id']}/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['pack']['name'], 'Day Spa')

        resp = self.client.get('/api/v1/admin/pack-builder/slug/spa/')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['pack']['id'], pack['id'])

        entry = PlatformAuditLog.objects.get(action='PACK_BUILDER_CREATE')
        self.assertEqual(entry.actor_email, 'root@example.com')
        self.assertEqual(entry.metadata, {'slug': 'spa', 'version': 1})

    def test_create_validation(self):
        self.client.force_login(self.admin)

        resp = self._create(slug='Not A Slug')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('slug', resp.json())

        resp = self._create(name='')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('name', resp.json())

        resp = self._create(config=['not', 'an', 'object'])
        self.assertEqual(resp.status_code, 400)
        self.assertIn('config', resp.json())

        self._create()
        resp = self._create()
        self.assertEqual(resp.status_code, 400)
        self.assertIn('slug', resp.json())

    def test_update_publish_new_version_delete(self):
        self.client.force_login(self.admin)
        pack_id = self._create().json()['pack']['id']
        url = f'/api/v1/admin/pack-builder/{pack_id}/'

        resp = self.client.patch(url, {'config': {'kanbanEnabled': True}}, content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['pack']['config'], {'kanbanEnabled': True})
        self.assertEqual(resp.json()['pack']['name'], 'Day Spa')

        resp = self.client.post(f'{url}publish/', {}, content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()['pack']['is_published'])
        self.assertEqual(resp.json()['pack']['rollout_stage'], 'published')

        resp = self.client.patch(url, {'name': 'Changed'}, content_type='application/json')
        self.assertEqual(resp.status_code, 400)

        resp = self.client.delete(url)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post('/api/v1/admin/pack-builder/slug/spa/new-version/', {}, content_type='application/json')
        self.assertEqual(resp.status_code, 201)
        v2 = resp.json()['pack']
        self.assertEqual(v2['version'], 2)
        self.assertEqual(v2['config'], {'kanbanEnabled': True})

        resp = self.client.post('/api/v1/admin/pack-builder/slug/spa/new-version/', {}, content_type='application/json')
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get('/api/v1/admin/pack-builder/slug/spa/versions/')
        self.assertEqual([v['version'] for v in resp.json()['items']], [2, 1])

        resp = self.client.get('/api/v1/admin/pack-builder/?all=1')
        self.assertEqual(resp.json()['count'], 2)
        resp = self.client.get('/api/v1/admin/pack-builder/')
        self.assertEqual(resp.json()['count'], 1)

        resp = self.client.delete(f"/api/v1/admin/pack-builder/{v2['id']}/")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(VerticalPackVersion.objects.filter(slug='spa').count(), 1)

        actions = set(PlatformAuditLog.objects.values_list('action', flat=True))
        for action in ('PACK_BUILDER_UPDATE', 'PACK_BUILDER_PUBLISH', 'PACK_BUILDER_NEW_VERSION', 'PACK_BUILDER_DELETE'):
            self.assertIn(action, actions)

    def test_not_found(self):
        self.client.force_login(self.admin)
        self.assertEqual(self.client.get('/api/v1/admin/pack-builder/999/').status_code, 404)
        self.assertEqual(self.client.get('/api/v1/admin/pack-builder/slug/missing/').status_code, 404)
        self.assertEqual(self.client.get('/api/v1/admin/pack-builder/slug/missing/versions/').status_code, 404)
