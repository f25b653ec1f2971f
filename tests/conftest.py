from unittest.mock import MagicMock

import pytest

from wrangler_profiles.lib.auth.activation import ActivationEngine
from wrangler_profiles.lib.profiles.store import ProfileStore
from wrangler_profiles.lib.wrangler.cli import WhoAmI, WranglerCLI
from wrangler_profiles.services.profile_manager import ProfileManager

DETECTED_ACCOUNT_ID = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def detected_account_id():
    return DETECTED_ACCOUNT_ID


@pytest.fixture
def profiles_dir(tmp_path):
    return tmp_path / "profiles"


@pytest.fixture
def config_slot(tmp_path):
    """Stand-in for ~/.wrangler/config/default.toml."""
    return tmp_path / "home" / ".wrangler" / "config" / "default.toml"


@pytest.fixture
def oauth_blob():
    return b'oauth_token = "abc"\nrefresh_token = "def"\nexpiration_time = "2030-01-01T00:00:00Z"\n'


@pytest.fixture
def store(profiles_dir):
    return ProfileStore(profiles_dir)


@pytest.fixture
def engine(store, config_slot):
    return ActivationEngine(store, config_slot)


@pytest.fixture
def mock_wrangler(config_slot, oauth_blob):
    """A wrangler whose `login` leaves `oauth_blob` in the config slot."""
    wrangler = MagicMock(spec=WranglerCLI)

    def fake_login():
        config_slot.parent.mkdir(parents=True, exist_ok=True)
        config_slot.write_bytes(oauth_blob)

    wrangler.login.side_effect = fake_login
    wrangler.whoami.return_value = WhoAmI(account_id=DETECTED_ACCOUNT_ID)
    wrangler.run.return_value = 0
    return wrangler


@pytest.fixture
def manager(store, engine, mock_wrangler):
    return ProfileManager(store, engine, mock_wrangler)
