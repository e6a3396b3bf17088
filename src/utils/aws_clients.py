import os
from typing import Callable, Optional

import boto3

from src.models.deployment import DeploymentRequest


def session_for(
    request: DeploymentRequest,
    session_factory: Callable[..., boto3.Session] = boto3.Session,
) -> boto3.Session:
    """Session bound to the credentials and region the run was configured with."""
    return session_factory(
        aws_access_key_id=request.aws_access_key_id,
        aws_secret_access_key=request.aws_secret_access_key,
        region_name=request.aws_region,
    )


def client(service: str, session: Optional[boto3.Session] = None, region_name: Optional[str] = None):
    # Allow LocalStack via AWS_ENDPOINT_URL_<SERVICE>
    kwargs = {}
    if region_name:
        kwargs["region_name"] = region_name
    ep = os.environ.get(f"AWS_ENDPOINT_URL_{service.upper()}")
    if ep:
        kwargs["endpoint_url"] = ep
    if session is None:
        return boto3.client(service, **kwargs)
    return session.client(service, **kwargs)
