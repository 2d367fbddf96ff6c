"""
Unit Tests for Article API Endpoints
"""
import pytest
from httpx import AsyncClient
from faker import Faker

fake = Faker()

ARTICLES_URL = '/api/v1/articles'


async def create_article(client: AsyncClient, headers: dict, **overrides) -> dict:
    payload = {
        'title': fake.sentence(nb_words=4),
        'description': fake.text(max_nb_chars=120),
        'status': 'Backlog',
    }
    payload.update(overrides)
    response = await client.post(ARTICLES_URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestArticleAccess:
    """Identity and allowlist checks"""

    @pytest.mark.asyncio
    async def test_missing_identity_is_401(self, client: AsyncClient):
        response = await client.get(ARTICLES_URL)

        assert response.status_code == 401
        assert response.json()['detail'] == 'Authentication required'

    @pytest.mark.asyncio
    async def test_not_allowlisted_is_403(self, client: AsyncClient, unauthorized_headers):
        response = await client.get(ARTICLES_URL, headers=unauthorized_headers)

        assert response.status_code == 403
        assert response.json()['detail'] == 'You have no permission!'

    @pytest.mark.asyncio
    async def test_allowlisted_caller(self, client: AsyncClient, auth_headers):
        response = await client.get(ARTICLES_URL, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []


class TestArticleCreation:

    @pytest.mark.asyncio
    async def test_create_with_tags(self, client: AsyncClient, auth_headers):
        article = await create_article(
            client, auth_headers, title='A', description='D', tags=[' urgent', 'infra', 'urgent', '']
        )

        assert article['title'] == 'A'
        assert article['status'] == 'Backlog'
        assert article['author'] == 'corp\\alice'
        assert article['author_name'] == 'alice'
        assert [t['name'] for t in article['tags']] == ['infra', 'urgent']

    @pytest.mark.asyncio
    async def test_create_without_tags(self, client: AsyncClient, auth_headers):
        article = await create_article(client, auth_headers)

        assert article['tags'] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('missing', ['title', 'description', 'status'])
    async def test_missing_field_is_400(self, client: AsyncClient, auth_headers, article_payload, missing):
        del article_payload[missing]

        response = await client.post(ARTICLES_URL, json=article_payload, headers=auth_headers)

        assert response.status_code == 400
        assert missing in response.json()['detail']

    @pytest.mark.asyncio
    async def test_blank_title_is_400(self, client: AsyncClient, auth_headers, article_payload):
        article_payload['title'] = '   '

        response = await client.post(ARTICLES_URL, json=article_payload, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_status_is_400(self, client: AsyncClient, auth_headers, article_payload):
        article_payload['status'] = 'Archived'

        response = await client.post(ARTICLES_URL, json=article_payload, headers=auth_headers)

        assert response.status_code == 400


class TestArticleRetrieval:

    @pytest.mark.asyncio
    async def test_get_single_article(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, tags=['docs'])

        response = await client.get(f"{ARTICLES_URL}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()['id'] == created['id']
        assert [t['name'] for t in response.json()['tags']] == ['docs']

    @pytest.mark.asyncio
    async def test_get_missing_article_is_404(self, client: AsyncClient, auth_headers):
        response = await client.get(f'{ARTICLES_URL}/999', headers=auth_headers)

        assert response.status_code == 404
        assert response.json()['detail'] == 'Article not found'

    @pytest.mark.asyncio
    async def test_article_tags_endpoint(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, tags=['b', 'a'])

        response = await client.get(f"{ARTICLES_URL}/{created['id']}/tags", headers=auth_headers)

        assert response.status_code == 200
        assert [t['name'] for t in response.json()] == ['a', 'b']

    @pytest.mark.asyncio
    async def test_list_contains_created(self, client: AsyncClient, auth_headers):
        first = await create_article(client, auth_headers)
        second = await create_article(client, auth_headers)

        response = await client.get(ARTICLES_URL, headers=auth_headers)

        ids = [a['id'] for a in response.json()]
        assert set(ids) == {first['id'], second['id']}


class TestArticleStatusUpdate:
    """PATCH /articles/{id}"""

    @pytest.mark.asyncio
    async def test_document_with_reference(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, title='A', description='D')

        response = await client.patch(
            f"{ARTICLES_URL}/{created['id']}",
            json={'status': 'Documented', 'knowledge_article_id': 'KB123'},
            headers=auth_headers,
        )

        assert response.status_code == 200
        article = response.json()
        assert article['status'] == 'Documented'
        assert article['knowledge_article_id'] == 'KB123'
        assert article['title'] == 'A'
        assert article['description'] == 'D'
        assert article['modified_by_name'] == 'alice'
        assert article['modified_at'] is not None

    @pytest.mark.asyncio
    async def test_back_to_backlog_keeps_reference(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers)
        url = f"{ARTICLES_URL}/{created['id']}"
        await client.patch(url, json={'status': 'Documented', 'knowledge_article_id': 'KB9'}, headers=auth_headers)

        response = await client.patch(url, json={'status': 'Backlog'}, headers=auth_headers)

        assert response.json()['status'] == 'Backlog'
        assert response.json()['knowledge_article_id'] == 'KB9'

    @pytest.mark.asyncio
    async def test_missing_status_is_400(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers)

        response = await client.patch(
            f"{ARTICLES_URL}/{created['id']}", json={'knowledge_article_id': 'KB1'}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_article_is_404(self, client: AsyncClient, auth_headers):
        response = await client.patch(
            f'{ARTICLES_URL}/999', json={'status': 'Documented'}, headers=auth_headers
        )

        assert response.status_code == 404


class TestArticleReplace:
    """PUT /articles/{id}"""

    @pytest.mark.asyncio
    async def test_replace_content_and_tags(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, tags=['old'])

        response = await client.put(
            f"{ARTICLES_URL}/{created['id']}",
            json={'title': 'New', 'description': 'Body', 'status': 'Documented', 'tags': ['new']},
            headers=auth_headers,
        )

        assert response.status_code == 200
        article = response.json()
        assert article['title'] == 'New'
        assert article['description'] == 'Body'
        assert article['status'] == 'Documented'
        assert [t['name'] for t in article['tags']] == ['new']

    @pytest.mark.asyncio
    async def test_replace_without_tags_keeps_tags(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, tags=['keep'])

        response = await client.put(
            f"{ARTICLES_URL}/{created['id']}",
            json={'title': 'New', 'description': 'Body', 'status': 'Backlog'},
            headers=auth_headers,
        )

        assert [t['name'] for t in response.json()['tags']] == ['keep']

    @pytest.mark.asyncio
    async def test_replace_missing_article_is_404(self, client: AsyncClient, auth_headers):
        response = await client.put(
            f'{ARTICLES_URL}/999',
            json={'title': 'T', 'description': 'D', 'status': 'Backlog'},
            headers=auth_headers,
        )

        assert response.status_code == 404


class TestArticleDeletion:

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, auth_headers):
        created = await create_article(client, auth_headers, tags=['x'])
        url = f"{ARTICLES_URL}/{created['id']}"

        response = await client.delete(url, headers=auth_headers)

        assert response.status_code == 204
        assert (await client.get(url, headers=auth_headers)).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_404(self, client: AsyncClient, auth_headers):
        response = await client.delete(f'{ARTICLES_URL}/999', headers=auth_headers)

        assert response.status_code == 404


class TestStorageFailures:
    """Storage errors surface as a generic 500"""

    @pytest.mark.asyncio
    async def test_storage_error_is_generic_500(self, session_factory, auth_headers, monkeypatch):
        from httpx import ASGITransport
        from sqlalchemy.exc import OperationalError

        from knowledge_backlog.main import app
        from knowledge_backlog.core.config import settings
        from knowledge_backlog.core.database import get_db
        from knowledge_backlog.services.article_service import article_service

        async def broken_list_articles(db):
            raise OperationalError('SELECT articles', {}, Exception('database is locked'))

        async def override_get_db():
            async with session_factory() as session:
                yield session

        monkeypatch.setattr(settings, 'DEBUG', False)
        monkeypatch.setattr(article_service, 'list_articles', broken_list_articles)
        app.dependency_overrides[get_db] = override_get_db

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url='http://test') as ac:
                response = await ac.get(ARTICLES_URL, headers=auth_headers)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            'detail': 'Internal server error',
            'message': 'An error occurred',
        }
        assert 'database is locked' not in response.text
