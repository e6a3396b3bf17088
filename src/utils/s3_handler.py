import logging
from typing import BinaryIO, Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from src.utils.aws_clients import client

# Configure global logger
logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when S3 rejects or fails an upload."""


class S3Handler:
    def __init__(self, session: Optional[boto3.Session] = None, region_name: Optional[str] = None, s3_client=None):
        self.s3 = s3_client or client("s3", session=session, region_name=region_name)
        logger.debug("S3Handler initialized in region: %s", self.s3.meta.region_name)

    def upload(self, bucket: str, key: str, body: BinaryIO, content_type: Optional[str] = None):
        """
        Streams an open binary file object to s3://bucket/key.
        The caller owns the file object and closes it.
        """
        extra = {}
        if content_type:
            extra["ContentType"] = content_type

        try:
            logger.info("Uploading object to s3://%s/%s", bucket, key)
            self.s3.upload_fileobj(body, bucket, key, ExtraArgs=extra or None)
            logger.info("Successfully uploaded %s to %s", key, bucket)
        except (ClientError, BotoCoreError, S3UploadFailedError) as e:
            logger.error("AWS error uploading to S3: %s", e, exc_info=True)
            raise StorageError(f"Failed to upload {key} to bucket {bucket}: {e}") from e
