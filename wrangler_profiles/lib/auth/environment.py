from typing import Dict, Mapping

from ..core.config import EnvConfig
from ..profiles.models import ApiTokenProfile, ProfileRecord


def build_invocation_env(record: ProfileRecord, env_config: EnvConfig) -> Dict[str, str]:
    """
    Environment variables that select a profile for a wrangler invocation.
    The account ID is always set; the API token only for token profiles.
    OAuth profiles rely on the session installed in wrangler's config file.
    """
    env = {env_config.account_id_var: record.account_id}
    if isinstance(record, ApiTokenProfile):
        env[env_config.api_token_var] = record.api_token
    return env


def overlay_env(
    base: Mapping[str, str], record: ProfileRecord, env_config: EnvConfig
) -> Dict[str, str]:
    """Return a copy of `base` with the profile's variables applied on top."""
    env = dict(base)
    if not isinstance(record, ApiTokenProfile):
        # an inherited token would take precedence over the OAuth session
        env.pop(env_config.api_token_var, None)
    env.update(build_invocation_env(record, env_config))
    return env
