import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from src.utils.aws_clients import client

logger = logging.getLogger(__name__)


class ComputeError(RuntimeError):
    """Raised when Lambda rejects or fails a code update."""


class LambdaCodeUpdater:
    '''
    Points an existing Lambda function at a code package already sitting
    in S3 (UpdateFunctionCode with S3Bucket/S3Key).
    '''
    def __init__(
        self,
        session: Optional[boto3.Session] = None,
        region_name: Optional[str] = None,
        *,
        publish: bool = False,
        wait: bool = False,
        lambda_client=None,
    ) -> None:
        self.lambda_client = lambda_client or client("lambda", session=session, region_name=region_name)
        self.publish = publish
        self.wait = wait

    def validate(self, function_name: str, bucket: str, key: str) -> None:
        '''Local structural check before any network call.'''
        params = {"FunctionName": function_name, "S3Bucket": bucket, "S3Key": key}
        missing = [name for name, value in params.items() if not value or not str(value).strip()]
        if missing:
            raise ComputeError(f"UpdateFunctionCode request missing: {', '.join(missing)}")
        if key.endswith("/"):
            raise ComputeError(f"S3Key must name an object, got prefix {key!r}")

    def update_code(self, function_name: str, bucket: str, key: str) -> Dict[str, Any]:
        '''Returns the interesting bits of the UpdateFunctionCode response.'''
        try:
            logger.info("Updating %s from s3://%s/%s", function_name, bucket, key)
            response = self.lambda_client.update_function_code(
                FunctionName=function_name,
                S3Bucket=bucket,
                S3Key=key,
                Publish=self.publish,
            )
            if self.wait:
                logger.info("Waiting for %s to finish updating", function_name)
                waiter = self.lambda_client.get_waiter("function_updated")
                waiter.wait(FunctionName=function_name)
        except WaiterError as e:
            logger.error("Lambda %s did not settle after update: %s", function_name, e, exc_info=True)
            raise ComputeError(f"Function {function_name} did not finish updating: {e}") from e
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "ResourceNotFoundException":
                logger.error("Lambda function %s not found", function_name)
            else:
                logger.error("AWS ClientError updating %s: %s", function_name, e, exc_info=True)
            raise ComputeError(f"Failed to update function {function_name} ({error_code}): {e}") from e
        except BotoCoreError as e:
            logger.error("AWS error updating %s: %s", function_name, e, exc_info=True)
            raise ComputeError(f"Failed to update function {function_name}: {e}") from e

        logger.info(
            "Updated %s, LastModified=%s",
            function_name, response.get("LastModified", "unknown"),
        )
        return {
            "code_sha256": response.get("CodeSha256"),
            "version": response.get("Version"),
            "last_modified": response.get("LastModified"),
        }
