"""Tests for AWS client construction and adapters."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.config import Config

from sqs_heavy_lifter._internal.aws import (
    USER_AGENT_EXTRA,
    S3BlobClient,
    SqsQueueClient,
    create_aws_client,
    create_blob_client,
    create_queue_client,
)
from sqs_heavy_lifter._version import __version__


class TestCreateAwsClient:
    """Tests for create_aws_client()."""

    def test_user_agent(self):
        """Should tag requests with the package version."""
        assert USER_AGENT_EXTRA == f"sqs-heavy-lifter/{__version__}"

    def test_passes_options(self):
        """Should pass options through to boto3.client."""
        with patch("sqs_heavy_lifter._internal.aws.boto3.client") as mock_client:
            create_aws_client("sqs", {"region_name": "eu-west-1", "endpoint_url": "http://localhost:4566"})

        args, kwargs = mock_client.call_args
        assert args == ("sqs",)
        assert kwargs["region_name"] == "eu-west-1"
        assert kwargs["endpoint_url"] == "http://localhost:4566"
        assert kwargs["config"].user_agent_extra == USER_AGENT_EXTRA

    def test_no_options(self):
        """Should work without options."""
        with patch("sqs_heavy_lifter._internal.aws.boto3.client") as mock_client:
            create_aws_client("s3")

        args, kwargs = mock_client.call_args
        assert args == ("s3",)
        assert set(kwargs) == {"config"}

    def test_merges_user_config(self):
        """Should merge a caller-supplied botocore Config."""
        user_config = Config(retries={"max_attempts": 2})
        with patch("sqs_heavy_lifter._internal.aws.boto3.client") as mock_client:
            create_aws_client("sqs", {"config": user_config})

        config = mock_client.call_args.kwargs["config"]
        assert config.retries == {"max_attempts": 2}
        assert config.user_agent_extra == USER_AGENT_EXTRA

    def test_does_not_mutate_options(self):
        """Should not modify the caller's options dict."""
        options = {"region_name": "us-east-1"}
        with patch("sqs_heavy_lifter._internal.aws.boto3.client"):
            create_aws_client("sqs", options)
        assert options == {"region_name": "us-east-1"}

    def test_factories_wrap_clients(self):
        """Should build adapters around the matching boto3 clients."""
        with patch("sqs_heavy_lifter._internal.aws.boto3.client") as mock_client:
            queue = create_queue_client({"region_name": "us-east-1"})
            blob = create_blob_client({"region_name": "us-east-1"})

        assert isinstance(queue, SqsQueueClient)
        assert isinstance(blob, S3BlobClient)
        services = [c.args[0] for c in mock_client.call_args_list]
        assert services == ["sqs", "s3"]


class TestSqsQueueClient:
    """Tests for SqsQueueClient."""

    def test_send_with_attributes(self):
        """Should call send_message with body and attributes."""
        sqs = MagicMock()
        sqs.send_message.return_value = {"MessageId": "m-1"}
        attrs = {"kind": {"DataType": "String", "StringValue": "order"}}

        result = SqsQueueClient(sqs).send("https://sqs/queue", '{"x": 1}', attrs)

        assert result == {"MessageId": "m-1"}
        sqs.send_message.assert_called_once_with(
            QueueUrl="https://sqs/queue",
            MessageBody='{"x": 1}',
            MessageAttributes=attrs,
        )

    def test_send_without_attributes(self):
        """Should omit MessageAttributes when there are none."""
        sqs = MagicMock()
        SqsQueueClient(sqs).send("https://sqs/queue", "{}", {})
        sqs.send_message.assert_called_once_with(QueueUrl="https://sqs/queue", MessageBody="{}")

    def test_send_propagates_errors(self):
        """Should let boto3 errors propagate."""
        sqs = MagicMock()
        sqs.send_message.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError, match="boom"):
            SqsQueueClient(sqs).send("https://sqs/queue", "{}")


class TestS3BlobClient:
    """Tests for S3BlobClient."""

    def test_put(self):
        """Should call put_object with bucket, key and body."""
        s3 = MagicMock()
        S3BlobClient(s3).put("bucket", "key-1", '{"x": 1}')
        s3.put_object.assert_called_once_with(Bucket="bucket", Key="key-1", Body='{"x": 1}')
