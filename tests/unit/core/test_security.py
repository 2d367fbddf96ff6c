"""
Unit Tests for caller identity parsing
"""
import pytest
from starlette.requests import Request

from knowledge_backlog.core.security import (
    Identity,
    extract_username,
    parse_identity,
    identity_from_request,
)


def make_request(headers: dict) -> Request:
    scope = {
        'type': 'http',
        'method': 'GET',
        'path': '/',
        'headers': [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


class TestExtractUsername:

    @pytest.mark.parametrize('raw, expected', [
        ('corp\\alice', 'alice'),
        ('corp/alice', 'alice'),
        ('alice', 'alice'),
        ('', ''),
    ])
    def test_extract(self, raw, expected):
        assert extract_username(raw) == expected


class TestParseIdentity:

    def test_lower_cases_and_splits(self):
        identity = parse_identity('  CORP\\Alice ')

        assert identity == Identity(raw='corp\\alice', username='alice')

    @pytest.mark.parametrize('raw', [None, '', '   '])
    def test_blank_is_none(self, raw):
        assert parse_identity(raw) is None

    def test_admin_flag_uses_settings(self):
        assert parse_identity('CORP\\admin').is_admin is True
        assert parse_identity('CORP\\alice').is_admin is False


class TestIdentityFromRequest:

    def test_reads_header(self):
        identity = identity_from_request(make_request({'X-Auth-User': 'CORP\\bob'}))

        assert identity.username == 'bob'

    def test_missing_header(self):
        assert identity_from_request(make_request({})) is None
