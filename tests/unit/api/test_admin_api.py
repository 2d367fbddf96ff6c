"""
Unit Tests for Admin API Endpoints
"""
import pytest
from httpx import AsyncClient


async def seed_articles(client: AsyncClient, headers: dict, count: int, tags=None):
    ids = []
    for i in range(count):
        response = await client.post(
            '/api/v1/articles',
            json={'title': f'T{i}', 'description': 'D', 'status': 'Backlog', 'tags': tags or []},
            headers=headers,
        )
        ids.append(response.json()['id'])
    return ids


class TestAdminAccess:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('method, path', [
        ('post', '/api/v1/admin/stats'),
        ('get', '/api/v1/admin/users'),
        ('post', '/api/v1/admin/clear-database'),
    ])
    async def test_non_admin_is_403(self, client: AsyncClient, auth_headers, method, path):
        response = await getattr(client, method)(path, headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_anonymous_is_401(self, client: AsyncClient):
        response = await client.get('/api/v1/admin/users')

        assert response.status_code == 401


class TestAdminStats:

    @pytest.mark.asyncio
    async def test_stats_without_window(self, client: AsyncClient, auth_headers, admin_headers):
        ids = await seed_articles(client, auth_headers, 3)
        await client.patch(
            f'/api/v1/articles/{ids[0]}', json={'status': 'Documented'}, headers=auth_headers
        )

        response = await client.post('/api/v1/admin/stats', headers=admin_headers)

        assert response.status_code == 200
        stats = response.json()
        assert stats['total_articles'] == 3
        assert stats['articles_added'] == 3
        assert stats['status_changes'] == 1
        assert stats['status_breakdown'] == {'Backlog': 2, 'Documented': 1}
        assert stats['user_stats'] == {'alice': {'articles_added': 3, 'status_changes': 1}}

    @pytest.mark.asyncio
    async def test_stats_with_past_window(self, client: AsyncClient, auth_headers, admin_headers):
        await seed_articles(client, auth_headers, 2)

        response = await client.post(
            '/api/v1/admin/stats',
            json={'start_date': '2020-01-01T00:00:00Z', 'end_date': '2020-12-31T23:59:59Z'},
            headers=admin_headers,
        )

        stats = response.json()
        assert stats['total_articles'] == 2
        assert stats['articles_added'] == 0
        assert stats['backlog_count'] == 2
        assert stats['user_stats'] == {}


class TestAdminUsers:

    @pytest.mark.asyncio
    async def test_add_list_remove(self, client: AsyncClient, admin_headers):
        response = await client.post(
            '/api/v1/admin/users', json={'username': 'CORP\\Carol'}, headers=admin_headers
        )
        assert response.status_code == 201
        assert response.json()['users'] == ['carol']

        response = await client.get('/api/v1/admin/users', headers=admin_headers)
        assert response.json()['users'] == ['carol']

        response = await client.delete('/api/v1/admin/users/carol', headers=admin_headers)
        assert response.status_code == 200
        assert response.json()['users'] == []

    @pytest.mark.asyncio
    async def test_added_user_gains_access(self, client: AsyncClient, admin_headers):
        headers = {'X-Auth-User': 'CORP\\dave'}
        assert (await client.get('/api/v1/articles', headers=headers)).status_code == 403

        await client.post('/api/v1/admin/users', json={'username': 'dave'}, headers=admin_headers)

        assert (await client.get('/api/v1/articles', headers=headers)).status_code == 200

    @pytest.mark.asyncio
    async def test_duplicate_is_400(self, client: AsyncClient, admin_headers):
        await client.post('/api/v1/admin/users', json={'username': 'erin'}, headers=admin_headers)

        response = await client.post(
            '/api/v1/admin/users', json={'username': 'ERIN'}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'User is already authorized'

    @pytest.mark.asyncio
    async def test_empty_username_is_400(self, client: AsyncClient, admin_headers):
        response = await client.post(
            '/api/v1/admin/users', json={'username': '  '}, headers=admin_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_unknown_is_404(self, client: AsyncClient, admin_headers):
        response = await client.delete('/api/v1/admin/users/ghost', headers=admin_headers)

        assert response.status_code == 404
        assert response.json()['detail'] == 'User not found in authorized list'


class TestClearDatabase:

    @pytest.mark.asyncio
    async def test_clear(self, client: AsyncClient, auth_headers, admin_headers):
        await seed_articles(client, auth_headers, 2, tags=['a', 'b'])

        response = await client.post('/api/v1/admin/clear-database', headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            'message': 'Database cleared successfully',
            'articles_deleted': 2,
            'tags_deleted': 2,
            'links_deleted': 4,
        }
        assert (await client.get('/api/v1/articles', headers=auth_headers)).json() == []
