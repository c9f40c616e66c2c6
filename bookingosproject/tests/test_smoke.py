import pytest
from django.contrib.auth import get_user_model

from accounts.models import Business, Membership


@pytest.mark.django_db
def test_health(client):
    resp = client.get('/api/v1/health/')
    assert resp.status_code == 200
    assert resp.json() == {'status': 'ok'}


@pytest.mark.django_db
def test_me_lists_memberships(client):
    User = get_user_model()
    user = User.objects.create_user(username='u1', email='u1@example.com', password='pw')
    org = Business.objects.create(name='Glow', slug='glow', vertical_pack='aesthetic')
    Membership.objects.create(user=user, organization=org, role='admin', is_active=True)

    assert client.get('/api/v1/me/').status_code == 401

    client.force_login(user)
    body = client.get('/api/v1/me/').json()
    assert body['username'] == 'u1'
    assert body['is_superuser'] is False
    assert body['orgs'] == [
        {'id': org.id, 'slug': 'glow', 'name': 'Glow', 'role': 'admin', 'vertical_pack': 'aesthetic'}
    ]


@pytest.mark.django_db
def test_jwt_token_grants_console_access(client):
    User = get_user_model()
    User.objects.create_superuser(username='root', email='root@example.com', password='pw')

    resp = client.post('/api/v1/auth/token/', {'username': 'root', 'password': 'pw'}, content_type='application/json')
    assert resp.status_code == 200
    access = resp.json()['access']

    resp = client.get('/api/v1/admin/packs-console/registry/', HTTP_AUTHORIZATION=f'Bearer {access}')
    assert resp.status_code == 200
    assert resp.json() == {'count': 0, 'items': []}
