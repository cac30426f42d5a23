"""boto3 wrapper exposing the S3 calls the sync engine consumes."""

from datetime import datetime
from typing import Any, BinaryIO, Dict, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from common.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_MAX_ATTEMPTS, DEFAULT_READ_TIMEOUT
from common.logging_config import get_logger
from common.types import RemoteObject
from syncer.exceptions import BucketNotFoundError, ObjectStoreError

logger = get_logger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def create_s3_client(
    region: str,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
):
    """
    Create an S3 client with explicit timeouts and a bounded retry policy.

    Credentials come from the standard boto3 credential chain.
    """
    config = BotoConfig(
        region_name=region,
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": max_attempts, "mode": "standard"},
    )
    return boto3.client("s3", config=config)


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))


class ObjectStore:
    """
    Target bucket accessor.

    Only three S3 operations are used: HeadObject for the metadata probe,
    a managed upload for the body, and ListBuckets at startup.
    """

    def __init__(self, client, bucket: str):
        """
        Args:
            client: boto3 S3 client (or a compatible stand-in)
            bucket: Target bucket name
        """
        self.client = client
        self.bucket = bucket

    def head(self, key: str) -> Optional[RemoteObject]:
        """
        Probe remote object metadata.

        Args:
            key: Object key

        Returns:
            RemoteObject, or None if no object exists at the key

        Raises:
            ObjectStoreError: On any failure other than not-found
        """
        try:
            response = self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return None
            raise ObjectStoreError(f"HeadObject failed for '{key}': {e}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"HeadObject failed for '{key}': {e}") from e

        last_modified: datetime = response["LastModified"]
        return RemoteObject(
            key=key,
            size=int(response.get("ContentLength", 0)),
            mtime=int(last_modified.timestamp()),
        )

    def put(self, key: str, body: BinaryIO) -> None:
        """
        Upload a stream, overwriting any existing object at the key.

        Raises:
            ObjectStoreError: If the upload fails
        """
        try:
            self.client.upload_fileobj(body, self.bucket, key)
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"S3 upload failed for '{key}': {e}") from e

    def list_buckets(self) -> Dict[str, Any]:
        """
        List buckets visible to the credentials.

        Returns:
            Mapping of bucket name -> creation date

        Raises:
            ObjectStoreError: If the listing fails
        """
        try:
            response = self.client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(f"Unable to list buckets: {e}") from e

        return {b["Name"]: b.get("CreationDate") for b in response.get("Buckets", [])}

    def confirm_bucket(self) -> Any:
        """
        Ensure the target bucket exists.

        Returns:
            Creation date of the target bucket (may be None)

        Raises:
            BucketNotFoundError: If the bucket is not listed
        """
        buckets = self.list_buckets()
        if self.bucket not in buckets:
            raise BucketNotFoundError(f"Unable to locate S3 bucket '{self.bucket}'")

        logger.info(f"Confirmed bucket {self.bucket} (created {buckets[self.bucket]})")
        return buckets[self.bucket]
