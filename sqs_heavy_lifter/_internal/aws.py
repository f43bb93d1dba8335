"""AWS collaborators: boto3 client construction and queue/blob adapters."""

from typing import Any, Protocol

import boto3
from botocore.config import Config

from sqs_heavy_lifter._version import __version__

USER_AGENT_EXTRA = f"sqs-heavy-lifter/{__version__}"


class QueueClient(Protocol):
    """Sends a text payload to a queue."""

    def send(
        self,
        queue_url: str,
        payload_text: str,
        attributes: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...


class BlobClient(Protocol):
    """Stores a text payload under a bucket and key."""

    def put(self, bucket: str, key: str, payload_text: str) -> None: ...


def _client_config(options: dict[str, Any]) -> Config:
    config = Config(user_agent_extra=USER_AGENT_EXTRA)
    user_config = options.get("config")
    if user_config is not None:
        config = config.merge(user_config)
    return config


def create_aws_client(service_name: str, options: dict[str, Any] | None = None) -> Any:
    """Create a configured boto3 client.

    Args:
        service_name: The AWS service, e.g. "sqs" or "s3".
        options: Keyword arguments for `boto3.client` (region_name,
            endpoint_url, credentials, a botocore `config`, ...).

    Returns:
        A boto3 client for the service.
    """
    options = dict(options or {})
    options["config"] = _client_config(options)
    return boto3.client(service_name, **options)


class SqsQueueClient:
    """QueueClient backed by a boto3 SQS client."""

    def __init__(self, sqs: Any) -> None:
        self._sqs = sqs

    def send(
        self,
        queue_url: str,
        payload_text: str,
        attributes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"QueueUrl": queue_url, "MessageBody": payload_text}
        # boto3 rejects MessageAttributes=None
        if attributes:
            params["MessageAttributes"] = attributes
        return self._sqs.send_message(**params)


class S3BlobClient:
    """BlobClient backed by a boto3 S3 client."""

    def __init__(self, s3: Any) -> None:
        self._s3 = s3

    def put(self, bucket: str, key: str, payload_text: str) -> None:
        self._s3.put_object(Bucket=bucket, Key=key, Body=payload_text)


def create_queue_client(options: dict[str, Any] | None = None) -> SqsQueueClient:
    """Create an SQS-backed queue client from boto3 client options."""
    return SqsQueueClient(create_aws_client("sqs", options))


def create_blob_client(options: dict[str, Any] | None = None) -> S3BlobClient:
    """Create an S3-backed blob client from boto3 client options."""
    return S3BlobClient(create_aws_client("s3", options))
