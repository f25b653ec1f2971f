import json
from datetime import datetime, timezone

import pytest

from wrangler_profiles.lib.core.errors import DecodeError
from wrangler_profiles.lib.profiles.codec import decode, encode
from wrangler_profiles.lib.profiles.models import ApiTokenProfile, OAuthProfile

CREATED = datetime(2025, 3, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


class TestCodec:
    @pytest.mark.parametrize(
        "record",
        [
            OAuthProfile(name="personal", account_id="acct-0", created=CREATED),
            ApiTokenProfile(name="work", account_id="acct-1", api_token="tok-1", created=CREATED),
            ApiTokenProfile(name="migrated", account_id="", api_token=""),
        ],
    )
    def test_round_trip(self, record):
        assert decode(encode(record)) == record

    def test_encode_is_deterministic(self):
        record = ApiTokenProfile(name="work", account_id="acct-1", api_token="tok-1", created=CREATED)
        assert encode(record) == encode(record)

    def test_encode_layout(self):
        record = ApiTokenProfile(name="work", account_id="acct-1", api_token="tok-1", created=CREATED)
        data = json.loads(encode(record))
        assert list(data) == ["name", "type", "account_id", "api_token", "created"]
        assert data["type"] == "api_token"

    def test_oauth_has_no_token_field(self):
        record = OAuthProfile(name="personal", account_id="acct-0", created=CREATED)
        data = json.loads(encode(record))
        assert data["type"] == "oauth"
        assert "api_token" not in data

    def test_decode_records_written_by_older_releases(self):
        raw = (
            b'{\n  "name": "old",\n  "type": "api_token",\n  "account_id": "a",\n'
            b'  "api_token": "t",\n  "created": "2024-01-01T00:00:00.000Z"\n}'
        )
        record = decode(raw)
        assert isinstance(record, ApiTokenProfile)
        assert record.created == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"not json",
            b"[]",
            b'{"name": "x", "account_id": "a", "created": "2024-01-01T00:00:00Z"}',
            b'{"name": "x", "type": "saml", "account_id": "a", "created": "2024-01-01T00:00:00Z"}',
            b'{"name": "x", "type": "api_token", "account_id": "a", "created": "2024-01-01T00:00:00Z"}',
            b'{"name": "x", "type": "oauth", "account_id": "a", "api_token": "stray", '
            b'"created": "2024-01-01T00:00:00Z"}',
        ],
    )
    def test_decode_rejects_malformed_input(self, raw):
        with pytest.raises(DecodeError):
            decode(raw)

    def test_decode_error_carries_path(self, tmp_path):
        path = tmp_path / "bad.json"
        with pytest.raises(DecodeError) as exc:
            decode(b"{", path=path)
        assert exc.value.path == path
        assert "bad.json" in str(exc.value)
