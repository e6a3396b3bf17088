from src.services.config_loader import load
from src.services.deployer import deploy
from src.services.errors import ClientSetupFailed, ConfigIncomplete, DeploymentError, InvalidFileName
from src.services.versioning import versioned_name
from src.models.deployment import to_json
from src.utils.aws_clients import session_for
from src.utils.s3_handler import S3Handler
from src.utils.lambda_updater import LambdaCodeUpdater
from src.utils.status import StageReporter
from botocore.exceptions import BotoCoreError
import argparse
import logging
import sys

logger = logging.getLogger(__name__)


# run pip install -e .
# then do your thing
def _configure_logging(args) -> None:
    if getattr(args, 'verbose', False):
        level = logging.DEBUG
    elif getattr(args, 'quiet', False):
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def run_deploy(args, source=None) -> int:
    """
    load config from the environment, upload the artifact and update the
    lambda function. returns the process exit code
    """
    reporter = StageReporter(markers=args.markers)
    try:
        request = load(source)
    except ConfigIncomplete as e:
        reporter.failure(str(e))
        return e.exit_code

    try:
        session = session_for(request)
        storage = S3Handler(session=session, region_name=request.aws_region)
        compute = LambdaCodeUpdater(
            session=session,
            region_name=request.aws_region,
            publish=args.publish,
            wait=args.wait,
        )
    except (BotoCoreError, ValueError) as e:
        reporter.failure(f"Failed to set up AWS clients: {e}")
        error = ClientSetupFailed(f"Failed to set up AWS clients for region {request.aws_region!r}: {e}")
        logger.error("Deployment failed at stage '%s': %s", error.stage, error)
        return error.exit_code

    try:
        result = deploy(request, storage, compute, reporter=reporter)
    except DeploymentError as e:
        logger.error("Deployment failed at stage '%s': %s", e.stage, e)
        return e.exit_code

    logger.info("Deployed %s to %s", result.s3_uri, result.function_name)
    if args.json:
        print(to_json(result, pretty=True))
    else:
        print(result.key)
    return 0


def deploy_command(args):
    sys.exit(run_deploy(args))


def version_name_command(args):
    try:
        print(versioned_name(args.name))
    except InvalidFileName as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        sys.exit(e.exit_code)


def main():
    parser = argparse.ArgumentParser(
        prog='lambdeploy',
        description='Upload a build artifact to S3 and point a Lambda function at it'
    )

    # since we're having different functions, use subparsers for each one
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    deploy_parser = subparsers.add_parser(
        'deploy',
        help='Deploy FILE_PATH to LAMBDA_FUNC via BUCKET_ADDRESS (all read from the environment)'
    )
    deploy_parser.add_argument(
        '--markers',
        action=argparse.BooleanOptionalAction,
        default=True,
        help='Prefix status lines with success/failure markers (default: on)'
    )
    deploy_parser.add_argument(
        '--publish',
        action='store_true',
        help='Publish a new function version with the update'
    )
    deploy_parser.add_argument(
        '--wait',
        action='store_true',
        help='Wait until the function finishes updating'
    )
    deploy_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the deployment result as JSON instead of just the key'
    )
    verbosity = deploy_parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors')
    deploy_parser.set_defaults(func=deploy_command)

    name_parser = subparsers.add_parser(
        'version-name',
        help='Print the versioned object key for a file name'
    )
    name_parser.add_argument('name', help='Base file name, e.g. build.zip')
    name_parser.set_defaults(func=version_name_command)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args)

    # execute the passed function
    args.func(args)


if __name__ == '__main__':
    main()
