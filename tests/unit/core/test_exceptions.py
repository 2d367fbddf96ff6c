"""
Unit Tests for the exception hierarchy
"""
from knowledge_backlog.core.exceptions import (
    BacklogError,
    AuthenticationError,
    AuthorizationError,
    ArticleNotFoundError,
    UserNotFoundError,
    ValidationError,
    EmptyUpdateError,
    DuplicateUserError,
    error_response,
)


class TestStatusCodes:

    def test_status_codes(self):
        assert BacklogError('boom').status_code == 500
        assert AuthenticationError().status_code == 401
        assert AuthorizationError().status_code == 403
        assert ArticleNotFoundError(1).status_code == 404
        assert UserNotFoundError('x').status_code == 404
        assert ValidationError('bad').status_code == 400
        assert EmptyUpdateError().status_code == 400
        assert DuplicateUserError('x').status_code == 400


class TestErrorPayload:

    def test_not_found_payload(self):
        body = error_response(ArticleNotFoundError(42))

        assert body['detail'] == 'Article not found'
        assert body['error']['code'] == 'ARTICLE_NOT_FOUND'
        assert body['error']['details'] == {'resource_type': 'Article', 'resource_id': '42'}

    def test_duplicate_user_payload(self):
        error = DuplicateUserError('alice')

        assert error.to_dict() == {
            'code': 'DUPLICATE_USER',
            'message': 'User is already authorized',
            'details': {'field': 'username', 'username': 'alice'},
        }

    def test_user_not_found_message(self):
        assert str(UserNotFoundError('ghost').message) == 'User not found in authorized list'
