# src/services/deployer.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, BinaryIO

from src.models.deployment import DeploymentRequest, DeploymentResult
from src.services.errors import (
    FileOpenError,
    InvalidFileName,
    InvalidUpdateRequest,
    UpdateFailed,
    UploadFailed,
)
from src.services.versioning import versioned_name
from src.utils.status import StageReporter

logger = logging.getLogger(__name__)


class StorageClient(Protocol):
    def upload(self, bucket: str, key: str, body: BinaryIO) -> Any: ...


class ComputeClient(Protocol):
    def update_code(self, function_name: str, bucket: str, key: str) -> Optional[Dict[str, Any]]: ...


def deploy(
    req: DeploymentRequest,
    storage: StorageClient,
    compute: ComputeClient,
    reporter: Optional[StageReporter] = None,
) -> DeploymentResult:
    """
    Upload the artifact under a fresh versioned key, then point the function
    at it. Each step runs only if the previous one succeeded; nothing is
    retried and an uploaded object is left in place if the update fails.
    """
    reporter = reporter or StageReporter()

    # Step 1: open the artifact
    try:
        artifact = open(req.file_path, "rb")
    except OSError as e:
        reporter.failure(f"Failed to open file: {e}")
        raise FileOpenError(f"Failed to open file {req.file_path}: {e}") from e

    with artifact:
        # Step 2: versioned key
        try:
            key = versioned_name(req.file_name)
        except InvalidFileName as e:
            reporter.failure(f"Invalid file name: {e}")
            raise
        logger.info("Versioned key for %s is %s", req.file_name, key)

        # Step 3: upload
        try:
            storage.upload(req.bucket, key, artifact)
        except Exception as e:
            reporter.failure(f"Failed to upload file: {e}")
            raise UploadFailed(f"Failed to upload s3://{req.bucket}/{key}: {e}") from e
        reporter.success("File uploaded to S3")

    # Step 4: validate then update the function
    validate = getattr(compute, "validate", None)
    if callable(validate):
        try:
            validate(req.function_name, req.bucket, key)
        except Exception as e:
            reporter.failure(f"Invalid update request: {e}")
            raise InvalidUpdateRequest(str(e)) from e

    try:
        details = compute.update_code(req.function_name, req.bucket, key)
    except Exception as e:
        reporter.failure("Failed to Update Lambda Function Code")
        raise UpdateFailed(f"Failed to update {req.function_name}: {e}") from e
    reporter.success("Successfully Updated Lambda Function")

    if not isinstance(details, dict):
        details = {}

    return DeploymentResult(
        function_name=req.function_name,
        bucket=req.bucket,
        key=key,
        code_sha256=details.get("code_sha256"),
        version=details.get("version"),
        last_modified=details.get("last_modified"),
    )
