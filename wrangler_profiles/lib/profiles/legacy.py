"""
Legacy `<name>.env` profiles.

Before profiles carried a type, every profile was a plain key-value file:

    CLOUDFLARE_ACCOUNT_ID=...
    CLOUDFLARE_API_TOKEN=...

Such a file always describes an API token profile. It is migrated into a JSON
record the first time it is loaded and is otherwise left alone, because shell
users still `source` it.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict

from ..core.config import EnvConfig
from .models import ApiTokenProfile, utcnow

logger = logging.getLogger("wrangler_profiles")


def parse_env_text(text: str) -> Dict[str, str]:
    """Parse KEY=VALUE lines. Comments, blank lines and malformed lines are skipped."""
    values = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        values[key] = value
    return values


def render_env_text(
    name: str,
    account_id: str,
    api_token: str,
    created: datetime,
    env_config: EnvConfig,
) -> str:
    """Render the body of a compatibility env file for a token profile."""
    return (
        f"# Wrangler profile: {name}\n"
        f"# Created: {created.isoformat()}\n"
        "\n"
        f"{env_config.account_id_var}={account_id}\n"
        f"{env_config.api_token_var}={api_token}\n"
    )


def read_legacy_env(env_path: Path) -> Dict[str, str]:
    """Read a legacy env file; an unreadable file counts as empty."""
    try:
        text = env_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Could not read legacy profile {env_path}: {e}")
        return {}
    return parse_env_text(text)


def migrate(
    name: str,
    env_path: Path,
    save: Callable[[ApiTokenProfile], None],
    env_config: EnvConfig,
) -> ApiTokenProfile:
    """
    Build an API token record from a legacy env file and persist it with `save`.
    Missing keys become empty strings; the legacy file itself is not modified.
    """
    values = read_legacy_env(env_path)
    profile = ApiTokenProfile(
        name=name,
        account_id=values.get(env_config.account_id_var, ""),
        api_token=values.get(env_config.api_token_var, ""),
        # The original creation time is unknown, so the migration time is recorded
        created=utcnow(),
    )
    save(profile)
    logger.info(f"Migrated legacy profile '{name}' to new format")
    return profile
