import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..core import files
from ..core.config import EnvConfig
from ..core.errors import DecodeError, NotFoundError
from . import codec, legacy
from .current import CurrentPointer
from .models import ApiTokenProfile, ProfileRecord, check_profile_key

logger = logging.getLogger("wrangler_profiles")

RECORD_SUFFIX = ".json"
OAUTH_SUFFIX = ".oauth.toml"
LEGACY_SUFFIX = ".env"
CURRENT_FILE = ".current"


class ProfileStore:
    """
    Profiles kept as files in one directory.

    A profile named `work` may own up to three files:
      work.json        the profile record (authoritative)
      work.oauth.toml  the wrangler OAuth session, OAuth profiles only
      work.env         legacy key-value file, token profiles only

    Writes touching several files are not atomic: a crash part-way through
    may leave some of them behind.
    """

    def __init__(
        self,
        root: Path,
        current: Optional[CurrentPointer] = None,
        env_config: Optional[EnvConfig] = None,
    ):
        self.root = root
        self.current = current or CurrentPointer(root / CURRENT_FILE)
        self.env_config = env_config or EnvConfig()

    def ensure_dir(self):
        """Ensure the profiles directory exists."""
        files.ensure_private_dir(self.root)

    def _path(self, name: str, suffix: str) -> Path:
        # Every per-profile path goes through here
        return self.root / f"{check_profile_key(name)}{suffix}"

    def record_path(self, name: str) -> Path:
        return self._path(name, RECORD_SUFFIX)

    def oauth_path(self, name: str) -> Path:
        return self._path(name, OAUTH_SUFFIX)

    def env_path(self, name: str) -> Path:
        return self._path(name, LEGACY_SUFFIX)

    def paths(self, name: str) -> List[Path]:
        """Every file a profile can own."""
        return [self.record_path(name), self.oauth_path(name), self.env_path(name)]

    def list(self) -> List[str]:
        """List all profile names, current and legacy format, sorted."""
        if not self.root.is_dir():
            return []

        names = set()
        for entry in self.root.iterdir():
            filename = entry.name
            if filename.startswith(".") or not entry.is_file():
                continue
            if filename.endswith(RECORD_SUFFIX):
                names.add(filename[: -len(RECORD_SUFFIX)])
            elif filename.endswith(LEGACY_SUFFIX):
                names.add(filename[: -len(LEGACY_SUFFIX)])
        return sorted(names)

    def exists(self, name: str) -> bool:
        return self.record_path(name).exists() or self.env_path(name).exists()

    def load(self, name: str) -> Optional[ProfileRecord]:
        """
        Load a profile record.
        Falls back to migrating a legacy env file; returns None if neither exists.
        Raises DecodeError if the record file is corrupt.
        """
        record_path = self.record_path(name)
        if record_path.exists():
            return codec.decode(record_path.read_bytes(), path=record_path)

        env_path = self.env_path(name)
        if env_path.exists():
            return legacy.migrate(name, env_path, self.save, self.env_config)

        return None

    def get(self, name: str) -> ProfileRecord:
        """Like load(), but a missing profile raises NotFoundError."""
        record = self.load(name)
        if record is None:
            raise NotFoundError(f"Profile '{name}' not found")
        return record

    def save(self, record: ProfileRecord):
        """Write the record, replacing any existing one of the same name."""
        self.ensure_dir()
        files.write_private_bytes(self.record_path(record.name), codec.encode(record))
        logger.debug(f"Saved profile record {record.name}")

    def remove(self, name: str) -> List[Path]:
        """
        Delete every file belonging to a profile and return the removed paths.
        The active pointer is cleared first if it names this profile, so it
        never outlives the record it points to.
        """
        paths = self.paths(name)
        if self.current.get() == name:
            self.current.clear()
            logger.info(f"Cleared active profile '{name}'")

        removed = []
        for path in paths:
            if path.exists():
                path.unlink()
                removed.append(path)
        logger.info(f"Removed profile '{name}' ({len(removed)} file(s))")
        return removed

    def entries(self) -> Iterator[Tuple[str, Optional[ProfileRecord], Optional[DecodeError]]]:
        """
        Yield (name, record, error) for every listed profile.
        A corrupt record yields (name, None, error) instead of aborting the listing.
        """
        for name in self.list():
            try:
                yield name, self.load(name), None
            except DecodeError as e:
                logger.warning(f"Skipping corrupt profile '{name}': {e}")
                yield name, None, e

    def has_oauth_blob(self, name: str) -> bool:
        return self.oauth_path(name).is_file()

    def read_oauth_blob(self, name: str) -> bytes:
        return self.oauth_path(name).read_bytes()

    def write_oauth_blob(self, name: str, data: bytes):
        self.ensure_dir()
        files.write_private_bytes(self.oauth_path(name), data)

    def write_env_file(self, record: ApiTokenProfile) -> Path:
        """Write the legacy env file kept alongside token profiles."""
        self.ensure_dir()
        env_path = self.env_path(record.name)
        text = legacy.render_env_text(
            record.name,
            record.account_id,
            record.api_token,
            record.created,
            self.env_config,
        )
        files.write_private_bytes(env_path, text.encode("utf-8"))
        return env_path

    def ensure_env_file(self, record: ApiTokenProfile) -> Path:
        """Return the legacy env file path, generating the file if it is missing."""
        env_path = self.env_path(record.name)
        if env_path.exists():
            return env_path
        return self.write_env_file(record)
