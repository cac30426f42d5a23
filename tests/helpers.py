"""Test doubles and tree builders shared by the test modules."""

import os
from datetime import datetime, timezone

from botocore.exceptions import ClientError

TARGET_BUCKET = "target-bucket"
OLD_MTIME = 1_000_000


class FakeS3Client:
    """
    In-memory stand-in for the boto3 S3 client calls used by ObjectStore.

    Uploaded objects are stamped with the current UTC time, like S3 does.
    """

    def __init__(self, buckets=(TARGET_BUCKET,)):
        self.buckets = {name: datetime(2020, 1, 1, tzinfo=timezone.utc) for name in buckets}
        self.objects = {}
        self.head_calls = []
        self.upload_calls = []

    def list_buckets(self):
        return {
            "Buckets": [
                {"Name": name, "CreationDate": created}
                for name, created in self.buckets.items()
            ]
        }

    def head_object(self, Bucket, Key):
        self.head_calls.append(Key)
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        body, modified = self.objects[Key]
        return {"ContentLength": len(body), "LastModified": modified}

    def upload_fileobj(self, Fileobj, Bucket, Key):
        self.upload_calls.append(Key)
        self.objects[Key] = (Fileobj.read(), datetime.now(timezone.utc))

    def put_remote(self, key, body, modified):
        self.objects[key] = (body, modified)


def write_file(path, content, mtime=OLD_MTIME):
    """Create a file (and parents) with a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    os.utime(path, (mtime, mtime))
    return path
