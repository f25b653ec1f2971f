import logging
from pathlib import Path
from typing import Optional

from ..core.files import ensure_private_dir

logger = logging.getLogger("wrangler_profiles")


class CurrentPointer:
    """
    The name of the active profile, persisted in a single-line file.
    The file is re-read on every access; nothing is cached in memory.
    """

    def __init__(self, path: Path):
        self.path = path

    def get(self) -> Optional[str]:
        """Get the name of the active profile, or None if none is selected."""
        if not self.path.exists():
            return None
        name = self.path.read_text(encoding="utf-8").strip()
        return name or None

    def set(self, name: str):
        """Set the active profile."""
        ensure_private_dir(self.path.parent)
        self.path.write_text(name, encoding="utf-8")
        logger.debug(f"Active profile set to {name}")

    def clear(self) -> bool:
        """
        Forget the active profile.
        Returns True if a pointer was removed, False if none was set.
        """
        if self.path.exists():
            self.path.unlink()
            return True
        return False
