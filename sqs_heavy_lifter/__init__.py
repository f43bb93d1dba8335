"""SQS Heavy Lifter for Python.

Sends messages to Amazon SQS, storing bodies that exceed the queue's size
limit in S3 and sending a pointer to them instead.

Public API:
    HeavyLifter - The sending client
    MessageAttribute, RawBytes, Text, Sized - Message attribute models
    PointerMessage - Queue payload for offloaded bodies
"""

from sqs_heavy_lifter._version import __version__
from sqs_heavy_lifter.client import HeavyLifter
from sqs_heavy_lifter.exceptions import (
    ConfigurationError,
    HeavyLifterError,
    InputError,
    OffloadError,
    SendError,
)
from sqs_heavy_lifter.models import (
    MessageAttribute,
    PointerMessage,
    RawBytes,
    Sized,
    Text,
)

__all__ = [
    "__version__",
    "HeavyLifter",
    "HeavyLifterError",
    "ConfigurationError",
    "InputError",
    "OffloadError",
    "SendError",
    "MessageAttribute",
    "PointerMessage",
    "RawBytes",
    "Sized",
    "Text",
]
