# src/services/config_loader.py
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Tuple

from src.models.deployment import DeploymentRequest
from src.services.errors import ConfigIncomplete

logger = logging.getLogger(__name__)

# (env var, DeploymentRequest field), in the order they are reported
REQUIRED_VARS: Tuple[Tuple[str, str], ...] = (
    ("FILE_PATH", "file_path"),
    ("AWS_ACCESS_KEY_ID", "aws_access_key_id"),
    ("AWS_SECRET_ACCESS_KEY", "aws_secret_access_key"),
    ("AWS_REGION", "aws_region"),
    ("BUCKET_ADDRESS", "bucket"),
    ("FILE_NAME", "file_name"),
    ("LAMBDA_FUNC", "function_name"),
)


def load(source: Optional[Mapping[str, str]] = None) -> DeploymentRequest:
    """
    Build a DeploymentRequest from a key/value source (the process
    environment unless one is given). Raises ConfigIncomplete naming every
    variable that is missing or empty.
    """
    if source is None:
        source = os.environ

    values = {}
    missing = []
    for var, attr in REQUIRED_VARS:
        value = source.get(var) or ""
        if not isinstance(value, str) or not value:
            missing.append(var)
            continue
        values[attr] = value

    if missing:
        logger.error("Deployment input incomplete, missing: %s", ", ".join(missing))
        raise ConfigIncomplete(missing)

    logger.debug("Loaded deployment config for function %s", values["function_name"])
    return DeploymentRequest(**values)
