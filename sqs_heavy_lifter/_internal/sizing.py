"""Message size accounting.

Sizes are computed the way SQS counts them against its message size limit:
the body as sent, plus, for every attribute, its name, data type and value.
"""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from sqs_heavy_lifter.models import TEXT_ENCODING, MessageAttribute

# =============================================================================
# Constants
# =============================================================================

MAX_MESSAGE_SIZE = 256 * 1024  # 256KB
MAX_MESSAGE_ATTRIBUTES = 10


def serialize_body(body: Any) -> str:
    """Serialize a message body to the JSON text that is sent on the wire.

    Pydantic models are dumped in JSON mode (using field aliases) first.
    Non-ASCII characters are kept as-is so that sizing sees their real
    encoded length.
    """
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True)
    return json.dumps(body, ensure_ascii=False, default=str)


def string_size(value: str | None) -> int:
    """Return the encoded byte length of a string (0 for None)."""
    if not value:
        return 0
    return len(value.encode(TEXT_ENCODING))


def attribute_size(name: str, attribute: MessageAttribute) -> int:
    """Return the number of bytes one attribute contributes to a message."""
    size = (
        string_size(name)
        + string_size(attribute.data_type)
        + string_size(attribute.string_value)
    )
    if attribute.binary_value is not None:
        size += attribute.binary_value.byte_length
    return size


def attributes_size(attributes: Mapping[str, MessageAttribute] | None) -> int:
    """Return the combined size of all attributes."""
    if not attributes:
        return 0
    return sum(attribute_size(name, attr) for name, attr in attributes.items())


def message_size(
    body_text: str, attributes: Mapping[str, MessageAttribute] | None = None
) -> int:
    """Return the total size of a message.

    Args:
        body_text: The body as produced by `serialize_body`.
        attributes: The message attributes, if any.
    """
    return string_size(body_text) + attributes_size(attributes)
