"""HeavyLifter: an SQS sender that offloads oversized bodies to S3."""

import math
import os
import sys
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from sqs_heavy_lifter._internal.aws import (
    BlobClient,
    QueueClient,
    create_blob_client,
    create_queue_client,
)
from sqs_heavy_lifter._internal.sizing import (
    MAX_MESSAGE_ATTRIBUTES,
    MAX_MESSAGE_SIZE,
    message_size,
    serialize_body,
)
from sqs_heavy_lifter.exceptions import (
    ConfigurationError,
    InputError,
    OffloadError,
    SendError,
)
from sqs_heavy_lifter.models import MessageAttribute, PointerMessage

AttributesInput = Mapping[str, MessageAttribute | dict[str, Any]]


class HeavyLifter:
    """Sends messages to SQS, moving bodies that are too large into S3.

    Each message is measured the way SQS measures it (serialized body plus
    attributes). If it fits under `size_threshold` it is sent as-is. Otherwise,
    or when `force_offload` is set, the body is written to S3 under a fresh
    UUID key and a pointer `{"s3BucketName": ..., "s3Key": ...}` is sent
    through the queue instead, with the original attributes.

    Configuration is fixed at construction and no other state is kept, so a
    single instance can be shared between threads.

    Use `HeavyLifter.from_env()` to create a client from environment variables.
    """

    max_attributes: int = MAX_MESSAGE_ATTRIBUTES

    def __init__(
        self,
        *,
        queue_url: str | None = None,
        bucket_name: str | None = None,
        size_threshold: int | None = None,
        force_offload: bool = False,
        aws_options: dict[str, Any] | None = None,
        sqs_options: dict[str, Any] | None = None,
        s3_options: dict[str, Any] | None = None,
        queue_client: QueueClient | None = None,
        blob_client: BlobClient | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the heavy lifter.

        Args:
            queue_url: URL of the SQS queue to send to. Required.
            bucket_name: S3 bucket used for offloaded bodies.
            size_threshold: Size in bytes above which bodies are offloaded.
                Defaults to 256KB.
            force_offload: Offload every message regardless of size.
            aws_options: boto3 client options shared by SQS and S3.
            sqs_options: boto3 client options for SQS (overrides aws_options).
            s3_options: boto3 client options for S3 (overrides aws_options).
            queue_client: Ready-made queue client; skips building one.
            blob_client: Ready-made blob client; skips building one.
            debug: Enable debug logging to stderr.

        Raises:
            ConfigurationError: If the options are missing or invalid.
        """
        if not queue_url:
            raise ConfigurationError("queue_url is required")

        if bucket_name is not None and not isinstance(bucket_name, str):
            raise ConfigurationError("bucket_name must be a string")

        if size_threshold is not None and (
            isinstance(size_threshold, bool)
            or not isinstance(size_threshold, (int, float))
            or not math.isfinite(size_threshold)
            or size_threshold <= 0
        ):
            raise ConfigurationError("size_threshold must be a positive number")

        if force_offload and not bucket_name:
            raise ConfigurationError("bucket_name is required when force_offload is set")

        self._queue_url = queue_url
        self._bucket_name = bucket_name
        self._size_threshold = size_threshold or MAX_MESSAGE_SIZE
        self._force_offload = bool(force_offload)
        self._debug = debug

        self._queue_client = queue_client or create_queue_client(
            sqs_options if sqs_options is not None else aws_options
        )
        self._blob_client = blob_client or create_blob_client(
            s3_options if s3_options is not None else aws_options
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "HeavyLifter":
        """Create a heavy lifter from environment variables.

        Required environment variables:
            HEAVY_LIFTER_QUEUE_URL: The SQS queue URL.

        Optional environment variables:
            HEAVY_LIFTER_BUCKET_NAME: The S3 bucket for offloaded bodies.
            HEAVY_LIFTER_MAX_MESSAGE_SIZE: Offload threshold in bytes.
            HEAVY_LIFTER_ALWAYS_S3: Set to "1" to offload every message.
            HEAVY_LIFTER_DEBUG: Set to "1" to enable debug logging.
            AWS_REGION: Region for both AWS clients.
            AWS_ENDPOINT_URL: Endpoint override for both AWS clients (e.g. LocalStack).

        Args:
            **overrides: Constructor arguments that take precedence over the
                environment (e.g. injected clients).

        Returns:
            A configured HeavyLifter.

        Raises:
            ConfigurationError: If HEAVY_LIFTER_QUEUE_URL is missing.
            ValueError: If HEAVY_LIFTER_MAX_MESSAGE_SIZE is not an integer.
        """
        max_message_size = os.environ.get("HEAVY_LIFTER_MAX_MESSAGE_SIZE")

        aws_options: dict[str, Any] = {}
        if os.environ.get("AWS_REGION"):
            aws_options["region_name"] = os.environ["AWS_REGION"]
        if os.environ.get("AWS_ENDPOINT_URL"):
            aws_options["endpoint_url"] = os.environ["AWS_ENDPOINT_URL"]

        kwargs: dict[str, Any] = {
            "queue_url": os.environ.get("HEAVY_LIFTER_QUEUE_URL"),
            "bucket_name": os.environ.get("HEAVY_LIFTER_BUCKET_NAME"),
            "size_threshold": int(max_message_size) if max_message_size else None,
            "force_offload": os.environ.get("HEAVY_LIFTER_ALWAYS_S3", "") == "1",
            "aws_options": aws_options,
            "debug": os.environ.get("HEAVY_LIFTER_DEBUG", "") == "1",
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def queue_url(self) -> str:
        return self._queue_url

    @property
    def bucket_name(self) -> str | None:
        return self._bucket_name

    @property
    def size_threshold(self) -> int:
        return self._size_threshold

    @property
    def force_offload(self) -> bool:
        return self._force_offload

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[sqs-heavy-lifter] {message}", file=sys.stderr)

    def _prepare_attributes(
        self, attributes: AttributesInput | None
    ) -> tuple[dict[str, MessageAttribute], dict[str, Any]]:
        """Validate attributes and return (models for sizing, wire dicts for sending)."""
        if attributes is None:
            return {}, {}

        if not isinstance(attributes, Mapping):
            raise InputError("attributes must be a mapping of name to attribute")

        if len(attributes) > self.max_attributes:
            raise InputError(f"attributes may contain up to {self.max_attributes} entries")

        models: dict[str, MessageAttribute] = {}
        wire: dict[str, Any] = {}
        for name, attribute in attributes.items():
            if not isinstance(name, str):
                raise InputError(f"attribute names must be strings, got {name!r}")
            if isinstance(attribute, MessageAttribute):
                models[name] = attribute
                wire[name] = attribute.to_wire()
                continue
            try:
                models[name] = MessageAttribute.from_wire(attribute)
            except ValidationError as e:
                raise InputError(f"invalid message attribute {name!r}: {e}") from e
            # Wire dicts are sent exactly as given
            wire[name] = attribute
        return models, wire

    def _plan(
        self, body: Any, attributes: AttributesInput | None
    ) -> tuple[str, dict[str, Any], bool]:
        """Validate a message and decide its route.

        Returns:
            The serialized body, the wire attributes, and whether to offload.
        """
        if not body:
            raise InputError("body is required")

        models, wire = self._prepare_attributes(attributes)
        body_text = serialize_body(body)
        size = message_size(body_text, models)

        offload = self._force_offload or size > self._size_threshold
        self._log_debug(
            f"Message size {size} bytes (threshold {self._size_threshold}), "
            f"route={'offload' if offload else 'direct'}"
        )
        return body_text, wire, offload

    def would_offload(self, body: Any, attributes: AttributesInput | None = None) -> bool:
        """Check whether a message would be sent through S3.

        Applies the same validation and routing rule as `send_message` without
        contacting SQS or S3.

        Raises:
            InputError: If the body or attributes are invalid.
        """
        _, _, offload = self._plan(body, attributes)
        return offload

    def send_message(self, body: Any, attributes: AttributesInput | None = None) -> dict[str, Any]:
        """Send a message, offloading the body to S3 when it is too large.

        Args:
            body: JSON-serializable message body, or a Pydantic model.
            attributes: Up to 10 message attributes, as MessageAttribute
                models or boto3 `MessageAttributeValue` dicts.

        Returns:
            The queue's send response (the boto3 `send_message` result for SQS).

        Raises:
            InputError: If the body is missing or the attributes are invalid.
                Nothing is sent.
            OffloadError: If writing the body to S3 failed. Nothing is sent.
            SendError: If the queue send failed. On the offload path the S3
                object has already been written; see `SendError.orphaned_key`.
        """
        body_text, wire_attributes, offload = self._plan(body, attributes)

        if offload:
            return self._send_through_s3(body_text, wire_attributes)
        return self._send_to_queue(body_text, wire_attributes)

    def _send_through_s3(self, body_text: str, attributes: dict[str, Any]) -> dict[str, Any]:
        """Store the body in S3, then send a pointer to it."""
        object_key = str(uuid.uuid4())

        if not self._bucket_name:
            raise OffloadError(
                "bucket_name is required to offload a message", key=object_key
            )

        try:
            self._blob_client.put(self._bucket_name, object_key, body_text)
        except Exception as e:
            self._log_debug(f"S3 write failed for s3://{self._bucket_name}/{object_key}: {e}")
            raise OffloadError(
                f"failed to store message body in s3://{self._bucket_name}/{object_key}",
                bucket_name=self._bucket_name,
                key=object_key,
            ) from e

        self._log_debug(f"Stored message body in s3://{self._bucket_name}/{object_key}")
        pointer = PointerMessage(s3_bucket_name=self._bucket_name, s3_key=object_key)
        return self._send_to_queue(serialize_body(pointer), attributes, orphaned_key=object_key)

    def _send_to_queue(
        self,
        payload_text: str,
        attributes: dict[str, Any],
        *,
        orphaned_key: str | None = None,
    ) -> dict[str, Any]:
        """Send a payload to the queue."""
        try:
            result = self._queue_client.send(self._queue_url, payload_text, attributes)
        except Exception as e:
            self._log_debug(f"Queue send failed: {e}")
            raise SendError(
                f"failed to send message to {self._queue_url}",
                queue_url=self._queue_url,
                orphaned_key=orphaned_key,
                bucket_name=self._bucket_name if orphaned_key else None,
            ) from e

        self._log_debug("Send succeeded")
        return result
