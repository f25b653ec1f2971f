import logging
from pathlib import Path

from ..core import files
from ..core.errors import MissingCredentialError, NotFoundError
from ..profiles.models import OAuthProfile, ProfileRecord
from ..profiles.store import ProfileStore

logger = logging.getLogger("wrangler_profiles")


class ActivationEngine:
    """
    Makes a stored profile the active one.

    OAuth profiles are activated by copying their stored session into
    wrangler's config file. Token profiles only need the active pointer;
    their credentials are handed to wrangler as environment variables
    when it is invoked.
    """

    def __init__(self, store: ProfileStore, config_slot: Path):
        self.store = store
        self.config_slot = config_slot

    def activate(self, name: str) -> ProfileRecord:
        """
        Activate a profile and point the active pointer at it.
        The pointer is only written after the activation side effects succeed,
        so a failure leaves the previously active profile selected.
        """
        record = self.store.get(name)

        if isinstance(record, OAuthProfile):
            self.install(name)

        self.store.current.set(name)
        logger.info(f"Switched to profile: {name} ({record.type_label})")
        return record

    def install(self, name: str):
        """Copy a profile's OAuth session into wrangler's config file."""
        if not self.store.has_oauth_blob(name):
            raise MissingCredentialError(f"OAuth config for profile '{name}' not found")

        files.copy_private(self.store.oauth_path(name), self.config_slot)
        logger.info(f"Activated OAuth config for profile: {name}")

    def capture(self, name: str) -> Path:
        """
        Copy wrangler's current config file into the profile's OAuth storage.
        Called right after a successful `wrangler login`.
        """
        if not self.config_slot.is_file():
            raise MissingCredentialError(
                f"Login completed but no OAuth tokens found at {self.config_slot}"
            )

        self.store.write_oauth_blob(name, self.config_slot.read_bytes())
        logger.info(f"Saved OAuth config for profile: {name}")
        return self.store.oauth_path(name)

    def active(self) -> ProfileRecord:
        """
        Load the active profile.
        Raises NotFoundError if no profile is selected or it no longer exists.
        """
        name = self.store.current.get()
        if name is None:
            raise NotFoundError("No profile selected. Use 'wrangler-profiles use <name>' first.")

        record = self.store.load(name)
        if record is None:
            raise NotFoundError(f"Current profile '{name}' not found")
        return record
