import logging
from pathlib import Path
from typing import Callable, Iterator, List, Mapping, Optional, Tuple

from ..lib.auth.activation import ActivationEngine
from ..lib.auth.environment import overlay_env
from ..lib.core.config import AppConfig, EnvConfig
from ..lib.core.errors import (
    AlreadyExistsError,
    DecodeError,
    InputValidationError,
    NotFoundError,
    WrongVariantError,
)
from ..lib.profiles.models import (
    ApiTokenProfile,
    OAuthProfile,
    ProfileRecord,
    validate_profile_name,
)
from ..lib.profiles.store import ProfileStore
from ..lib.wrangler.cli import WranglerCLI

logger = logging.getLogger("wrangler_profiles")


class ProfileManager:
    """
    One method per CLI command.
    Errors are raised as ProfileError subclasses; printing and exit codes
    are left to the command layer.
    """

    def __init__(
        self,
        store: ProfileStore,
        engine: ActivationEngine,
        wrangler: WranglerCLI,
        env_config: Optional[EnvConfig] = None,
    ):
        self.store = store
        self.engine = engine
        self.wrangler = wrangler
        self.env_config = env_config or store.env_config

    @classmethod
    def from_config(cls, app_config: AppConfig) -> "ProfileManager":
        store = ProfileStore(app_config.storage.path, env_config=app_config.env)
        engine = ActivationEngine(store, app_config.wrangler.config_path)
        wrangler = WranglerCLI(
            app_config.wrangler.executable, app_config.wrangler.whoami_timeout
        )
        return cls(store, engine, wrangler, app_config.env)

    def list_entries(self) -> Iterator[Tuple[str, Optional[ProfileRecord], Optional[DecodeError]]]:
        return self.store.entries()

    def current_name(self) -> Optional[str]:
        return self.store.current.get()

    def check_new_name(self, name: str):
        validate_profile_name(name)
        if self.store.exists(name):
            raise AlreadyExistsError(f"Profile '{name}' already exists")

    def add_token(self, name: str, account_id: str, api_token: str) -> ApiTokenProfile:
        """Create an API token profile plus its legacy env file."""
        self.check_new_name(name)
        if not account_id or not api_token:
            raise InputValidationError("Account ID and API Token are required")

        profile = ApiTokenProfile(name=name, account_id=account_id, api_token=api_token)
        self.store.save(profile)
        # Also save .env for shells that source it
        self.store.write_env_file(profile)
        logger.info(f"Created API token profile: {name}")
        return profile

    def add_oauth(self, name: str, ask_account_id: Callable[[], str]) -> OAuthProfile:
        """
        Create an OAuth profile via `wrangler login`.
        The account ID is detected with `wrangler whoami`, falling back to
        `ask_account_id()` when detection fails.
        """
        self.check_new_name(name)

        self.wrangler.login()
        oauth_path = self.engine.capture(name)

        whoami = self.wrangler.whoami()
        if whoami and whoami.account_id:
            account_id = whoami.account_id
            logger.info(f"Detected Account ID: {account_id}")
        else:
            account_id = (ask_account_id() or "").strip()
            if not account_id:
                oauth_path.unlink()
                raise InputValidationError("Account ID is required")

        profile = OAuthProfile(name=name, account_id=account_id)
        self.store.save(profile)
        logger.info(f"Created OAuth profile: {name}")
        return profile

    def use(self, name: str) -> ProfileRecord:
        return self.engine.activate(name)

    def login(self, name: str) -> Path:
        """Re-run the browser login for an existing OAuth profile and store the new session."""
        profile = self.store.get(name)
        if not isinstance(profile, OAuthProfile):
            raise WrongVariantError(f"Profile '{name}' is not an OAuth profile")

        self.wrangler.login()
        return self.engine.capture(name)

    def remove(self, name: str) -> List[Path]:
        if not self.store.exists(name):
            raise NotFoundError(f"Profile '{name}' not found")
        return self.store.remove(name)

    def active(self) -> ProfileRecord:
        return self.engine.active()

    def env_file(self) -> Path:
        """Path of the active token profile's env file, generated if missing."""
        profile = self.engine.active()
        if not isinstance(profile, ApiTokenProfile):
            raise WrongVariantError(
                "OAuth profiles don't use env files - credentials are in "
                f"{self.engine.config_slot}"
            )
        return self.store.ensure_env_file(profile)

    def invocation_env(self, base: Mapping[str, str]) -> Tuple[ProfileRecord, dict]:
        profile = self.engine.active()
        return profile, overlay_env(base, profile, self.env_config)

    def run(self, args: List[str], base_env: Mapping[str, str]) -> int:
        """Run wrangler under the active profile and return its exit code."""
        _, env = self.invocation_env(base_env)
        return self.wrangler.run(list(args), env)

    def deploy(self, env_name: Optional[str], base_env: Mapping[str, str]) -> int:
        args = ["deploy", "--env", env_name] if env_name else ["deploy"]
        return self.run(args, base_env)
