# src/models/deployment.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Optional
import json


# Validated inputs for one deployment run
@dataclass(frozen=True)
class DeploymentRequest:
    """Everything a single artifact -> S3 -> Lambda run needs."""
    file_path: str               # FILE_PATH
    aws_access_key_id: str       # AWS_ACCESS_KEY_ID
    aws_secret_access_key: str = field(repr=False)  # AWS_SECRET_ACCESS_KEY
    aws_region: str              # AWS_REGION
    bucket: str                  # BUCKET_ADDRESS
    file_name: str               # FILE_NAME
    function_name: str           # LAMBDA_FUNC


# What a successful run leaves behind
@dataclass(frozen=True)
class DeploymentResult:
    function_name: str
    bucket: str
    key: str
    code_sha256: Optional[str] = None
    version: Optional[str] = None
    last_modified: Optional[str] = None

    @property
    def s3_uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


# ---- Helpers ----
# Convert a dataclass object into a JSON string
def to_json(obj: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(asdict(obj), ensure_ascii=False, indent=2)
    return json.dumps(asdict(obj), ensure_ascii=False, separators=(",", ":"))


__all__ = ["DeploymentRequest", "DeploymentResult", "to_json"]
