"""Errors raised by the profile store, activation engine and wrangler wrapper.

Every error derives from ProfileError so commands can report any of them the
same way: print the message and exit non-zero.
"""


class ProfileError(Exception):
    """Base class for all wrangler-profiles errors."""


class NotFoundError(ProfileError):
    """A referenced profile, or the active profile pointer, does not exist."""


class AlreadyExistsError(ProfileError):
    """A profile with the requested name already exists."""


class DecodeError(ProfileError):
    """A stored profile record could not be decoded."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class MissingCredentialError(ProfileError):
    """The OAuth credential file needed for an operation is absent."""


class ExternalToolError(ProfileError):
    """The wrangler executable failed or could not be launched."""


class InputValidationError(ProfileError):
    """User supplied input is empty or malformed."""


class WrongVariantError(ProfileError):
    """The operation requires the other credential type (OAuth vs API token)."""
