import re
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import InputValidationError

# Letters, digits, dot, dash and underscore; no path separators.
_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

OAUTH = "oauth"
API_TOKEN = "api_token"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_profile_name(name: str) -> str:
    """Reject names that cannot be used as a file name key."""
    if not name or not _NAME_RE.match(name):
        raise InputValidationError(
            f"Invalid profile name '{name}'. "
            "Use only letters, digits, '.', '-' and '_'."
        )
    return name


def check_profile_key(name: str) -> str:
    """
    Reject names that would resolve outside the profiles directory.
    Looser than validate_profile_name so legacy files with unusual names stay reachable.
    """
    if not name or name.startswith(".") or any(sep in name for sep in ("/", "\\", "\0")):
        raise InputValidationError(f"Invalid profile name '{name}'")
    return name


class _ProfileBase(BaseModel):
    # Records are immutable; unknown fields (e.g. a token on an OAuth record) are rejected
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    account_id: str
    created: datetime = Field(default_factory=utcnow)

    @property
    def type_label(self) -> str:
        return "OAuth" if self.type == OAUTH else "API Token"


class OAuthProfile(_ProfileBase):
    """A profile backed by a browser-issued wrangler OAuth session."""

    type: Literal["oauth"] = OAUTH


class ApiTokenProfile(_ProfileBase):
    """A profile backed by a long-lived Cloudflare API token."""

    type: Literal["api_token"] = API_TOKEN
    api_token: str


ProfileRecord = Annotated[
    Union[OAuthProfile, ApiTokenProfile], Field(discriminator="type")
]
