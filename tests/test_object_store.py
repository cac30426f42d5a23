"""Tests for the boto3 ObjectStore wrapper (mocked client)."""

import io
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from syncer.exceptions import BucketNotFoundError, ObjectStoreError
from syncer.object_store import ObjectStore, create_s3_client

from tests.helpers import TARGET_BUCKET


def client_error(code, operation="HeadObject"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def mock_s3():
    return MagicMock()


@pytest.fixture
def object_store(mock_s3):
    return ObjectStore(mock_s3, TARGET_BUCKET)


class TestHead:
    """Tests for ObjectStore.head."""

    def test_head_returns_metadata(self, mock_s3, object_store):
        modified = datetime(2024, 5, 1, 12, 0, 30, tzinfo=timezone.utc)
        mock_s3.head_object.return_value = {"ContentLength": 42, "LastModified": modified}

        result = object_store.head("data/a.txt")

        assert result.key == "data/a.txt"
        assert result.size == 42
        assert result.mtime == int(modified.timestamp())
        mock_s3.head_object.assert_called_once_with(Bucket=TARGET_BUCKET, Key="data/a.txt")

    @pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
    def test_head_not_found_is_absent(self, mock_s3, object_store, code):
        mock_s3.head_object.side_effect = client_error(code)

        assert object_store.head("data/a.txt") is None

    def test_head_access_denied_raises(self, mock_s3, object_store):
        mock_s3.head_object.side_effect = client_error("403")

        with pytest.raises(ObjectStoreError):
            object_store.head("data/a.txt")

    def test_head_connection_error_raises(self, mock_s3, object_store):
        mock_s3.head_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")

        with pytest.raises(ObjectStoreError):
            object_store.head("data/a.txt")


class TestPut:
    """Tests for ObjectStore.put."""

    def test_put_uses_managed_upload(self, mock_s3, object_store):
        body = io.BytesIO(b"payload")

        object_store.put("data/a.txt", body)

        mock_s3.upload_fileobj.assert_called_once_with(body, TARGET_BUCKET, "data/a.txt")

    def test_put_failure_raises(self, mock_s3, object_store):
        mock_s3.upload_fileobj.side_effect = client_error("500", "PutObject")

        with pytest.raises(ObjectStoreError, match="upload failed"):
            object_store.put("data/a.txt", io.BytesIO(b"payload"))


class TestBuckets:
    """Tests for list_buckets and confirm_bucket."""

    def test_list_buckets(self, mock_s3, object_store):
        created = datetime(2020, 1, 1, tzinfo=timezone.utc)
        mock_s3.list_buckets.return_value = {
            "Buckets": [
                {"Name": TARGET_BUCKET, "CreationDate": created},
                {"Name": "other", "CreationDate": created},
            ]
        }

        assert object_store.list_buckets() == {TARGET_BUCKET: created, "other": created}

    def test_confirm_bucket_returns_creation_date(self, mock_s3, object_store):
        created = datetime(2020, 1, 1, tzinfo=timezone.utc)
        mock_s3.list_buckets.return_value = {"Buckets": [{"Name": TARGET_BUCKET, "CreationDate": created}]}

        assert object_store.confirm_bucket() == created

    def test_confirm_missing_bucket_raises(self, mock_s3, object_store):
        mock_s3.list_buckets.return_value = {"Buckets": [{"Name": "other"}]}

        with pytest.raises(BucketNotFoundError, match=TARGET_BUCKET):
            object_store.confirm_bucket()

    def test_list_buckets_failure_raises(self, mock_s3, object_store):
        mock_s3.list_buckets.side_effect = client_error("AccessDenied", "ListBuckets")

        with pytest.raises(ObjectStoreError, match="Unable to list buckets"):
            object_store.list_buckets()


def test_create_s3_client_sets_timeouts_and_region():
    with patch("boto3.client") as mock_client:
        create_s3_client("us-west-2", connect_timeout=3, read_timeout=7, max_attempts=2)

    args, kwargs = mock_client.call_args
    config = kwargs["config"]
    assert args == ("s3",)
    assert config.region_name == "us-west-2"
    assert config.connect_timeout == 3
    assert config.read_timeout == 7
    assert config.retries == {"max_attempts": 2, "mode": "standard"}
