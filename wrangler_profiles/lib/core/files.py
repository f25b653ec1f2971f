import logging
import os
from pathlib import Path

logger = logging.getLogger("wrangler_profiles")

PRIVATE_FILE_MODE = 0o600
PRIVATE_DIR_MODE = 0o700


def ensure_private_dir(path: Path):
    """Create a directory (and parents) readable only by the owner."""
    path.mkdir(mode=PRIVATE_DIR_MODE, parents=True, exist_ok=True)


def write_private_bytes(path: Path, data: bytes):
    """
    Write bytes to a file with owner-only read/write permissions.
    Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIVATE_FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    # os.open only applies the mode on creation, and umask may narrow it
    os.chmod(path, PRIVATE_FILE_MODE)


def copy_private(src: Path, dst: Path):
    """Copy a file byte for byte, leaving the destination owner-only."""
    write_private_bytes(dst, src.read_bytes())
    logger.debug(f"Copied {src} -> {dst}")
