"""Public exceptions for the SQS Heavy Lifter."""


class HeavyLifterError(Exception):
    """Base exception for all SQS Heavy Lifter errors."""


class ConfigurationError(HeavyLifterError):
    """Invalid or missing construction options."""


class InputError(HeavyLifterError):
    """Invalid per-call arguments (missing body, too many attributes)."""


class OffloadError(HeavyLifterError):
    """Writing the message body to S3 failed. No queue send was attempted."""

    def __init__(
        self,
        message: str,
        bucket_name: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.bucket_name = bucket_name
        self.key = key


class SendError(HeavyLifterError):
    """Sending to the queue failed.

    When the failure happened on the offload path, `orphaned_key` and
    `bucket_name` identify the S3 object that was written but never referenced
    by a queue message. Cleaning it up is left to the caller.
    """

    def __init__(
        self,
        message: str,
        queue_url: str | None = None,
        orphaned_key: str | None = None,
        bucket_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.queue_url = queue_url
        self.orphaned_key = orphaned_key
        self.bucket_name = bucket_name
