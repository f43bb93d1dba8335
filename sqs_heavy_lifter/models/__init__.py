"""Public Pydantic models for the SQS Heavy Lifter.

Message attributes mirror the SQS `MessageAttributeValue` shape. A binary
attribute value is one of a closed set of variants, each of which knows its
own size in bytes:

    RawBytes - a byte buffer
    Text     - a string sent as binary (sized by its UTF-8 encoding)
    Sized    - a blob-like object that declares its own size
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

from sqs_heavy_lifter.exceptions import InputError

TEXT_ENCODING = "utf-8"

# =============================================================================
# Binary Attribute Values
# =============================================================================


class RawBytes(BaseModel):
    """Binary value backed by a byte buffer."""

    kind: Literal["raw"] = "raw"
    data: bytes

    model_config = {"frozen": True}

    @property
    def byte_length(self) -> int:
        return len(self.data)

    def to_wire(self) -> bytes:
        return self.data


class Text(BaseModel):
    """Binary value given as a string."""

    kind: Literal["text"] = "text"
    value: str

    model_config = {"frozen": True}

    @property
    def byte_length(self) -> int:
        return len(self.value.encode(TEXT_ENCODING))

    def to_wire(self) -> str:
        return self.value


class Sized(BaseModel):
    """Binary value backed by a blob-like object with a declared size.

    The payload object is passed through to the queue untouched; only
    `declared_size` takes part in size accounting.
    """

    kind: Literal["sized"] = "sized"
    declared_size: int = Field(ge=0)
    payload: Any

    model_config = {"frozen": True}

    @field_validator("payload")
    @classmethod
    def payload_present(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("payload must not be None")
        return v

    @property
    def byte_length(self) -> int:
        return self.declared_size

    def to_wire(self) -> Any:
        return self.payload


BinaryValue = Annotated[RawBytes | Text | Sized, Field(discriminator="kind")]


def binary_value_from_raw(value: Any) -> RawBytes | Text | Sized | None:
    """Classify a raw binary attribute value into a BinaryValue variant.

    Args:
        value: A bytes-like object, a string, an object exposing an integer
            `size`, or None.

    Returns:
        The matching variant, or None for an absent value.

    Raises:
        InputError: If the value has none of the supported shapes.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytes(data=bytes(value))
    if isinstance(value, str):
        return Text(value=value)
    size = getattr(value, "size", None)
    if isinstance(size, int) and not isinstance(size, bool):
        return Sized(declared_size=size, payload=value)
    raise InputError(f"unsupported binary attribute value of type {type(value).__name__}")


# =============================================================================
# Message Attributes
# =============================================================================


class MessageAttribute(BaseModel):
    """A single SQS message attribute.

    Required fields:
        data_type: SQS data type tag (e.g., 'String', 'Number', 'Binary')

    Optional fields:
        string_value: Value for String and Number attributes
        binary_value: Value for Binary attributes
    """

    data_type: str
    string_value: str | None = None
    binary_value: BinaryValue | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_wire(cls, attribute: dict[str, Any]) -> "MessageAttribute":
        """Build an attribute from the boto3 `MessageAttributeValue` dict."""
        if not isinstance(attribute, dict):
            raise InputError(
                f"message attribute must be a dict, got {type(attribute).__name__}"
            )
        if "DataType" not in attribute:
            raise InputError("message attribute is missing DataType")
        return cls(
            data_type=attribute["DataType"],
            string_value=attribute.get("StringValue"),
            binary_value=binary_value_from_raw(attribute.get("BinaryValue")),
        )

    def to_wire(self) -> dict[str, Any]:
        """Render the attribute in the shape boto3 expects."""
        wire: dict[str, Any] = {"DataType": self.data_type}
        if self.string_value is not None:
            wire["StringValue"] = self.string_value
        if self.binary_value is not None:
            wire["BinaryValue"] = self.binary_value.to_wire()
        return wire


# =============================================================================
# Pointer Message
# =============================================================================


class PointerMessage(BaseModel):
    """Queue payload that points at a message body stored in S3."""

    s3_bucket_name: str = Field(alias="s3BucketName")
    s3_key: str = Field(alias="s3Key")

    model_config = {"frozen": True, "populate_by_name": True}


__all__ = [
    "BinaryValue",
    "MessageAttribute",
    "PointerMessage",
    "RawBytes",
    "Sized",
    "Text",
    "binary_value_from_raw",
]
