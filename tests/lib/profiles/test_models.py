import pytest
from pydantic import ValidationError

from wrangler_profiles.lib.core.errors import InputValidationError
from wrangler_profiles.lib.profiles.models import (
    ApiTokenProfile,
    OAuthProfile,
    check_profile_key,
    validate_profile_name,
)


class TestModels:
    def test_oauth_profile_rejects_token(self):
        with pytest.raises(ValidationError):
            OAuthProfile(name="p", account_id="a", api_token="t")

    def test_token_profile_requires_token(self):
        with pytest.raises(ValidationError):
            ApiTokenProfile(name="p", account_id="a")

    def test_records_are_immutable(self):
        profile = ApiTokenProfile(name="p", account_id="a", api_token="t")
        with pytest.raises(ValidationError):
            profile.api_token = "other"

    def test_created_is_timezone_aware(self):
        profile = OAuthProfile(name="p", account_id="a")
        assert profile.created.tzinfo is not None

    def test_type_labels(self):
        assert OAuthProfile(name="p", account_id="a").type_label == "OAuth"
        assert ApiTokenProfile(name="p", account_id="a", api_token="t").type_label == "API Token"

    @pytest.mark.parametrize("name", ["work", "my-profile", "client_2", "prod.eu"])
    def test_valid_names(self, name):
        assert validate_profile_name(name) == name

    @pytest.mark.parametrize("name", ["", ".current", "../evil", "a/b", "with space"])
    def test_invalid_names(self, name):
        with pytest.raises(InputValidationError):
            validate_profile_name(name)

    @pytest.mark.parametrize("name", ["work", "with space", "_odd"])
    def test_profile_key_accepts_plain_file_names(self, name):
        assert check_profile_key(name) == name

    @pytest.mark.parametrize("name", ["", ".", "..", "../evil", "a/b", "a\\b", ".current"])
    def test_profile_key_rejects_path_components(self, name):
        with pytest.raises(InputValidationError):
            check_profile_key(name)
