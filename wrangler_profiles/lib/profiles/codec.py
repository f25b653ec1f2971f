import json

from pydantic import TypeAdapter, ValidationError

from ..core.errors import DecodeError
from .models import ProfileRecord

_ADAPTER = TypeAdapter(ProfileRecord)

# Stable key order for the JSON document, matching what older releases wrote
_FIELD_ORDER = ("name", "type", "account_id", "api_token", "created")


def encode(record: ProfileRecord) -> bytes:
    """Serialize a profile record to a JSON document."""
    data = record.model_dump(mode="json")
    ordered = {key: data[key] for key in _FIELD_ORDER if key in data}
    return (json.dumps(ordered, indent=2) + "\n").encode("utf-8")


def decode(data: bytes, path=None) -> ProfileRecord:
    """
    Parse a JSON document into a profile record.
    Raises DecodeError on malformed JSON or a document that is not a valid record.
    """
    try:
        return _ADAPTER.validate_json(data)
    except ValidationError as e:
        where = f" in {path}" if path else ""
        raise DecodeError(
            f"Corrupt profile record{where}: {e.error_count()} validation error(s)",
            path=path,
        ) from e
