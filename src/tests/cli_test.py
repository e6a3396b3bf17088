import io
import os
import unittest
from unittest.mock import Mock, patch
from argparse import Namespace
from contextlib import redirect_stdout

import cli
from cli import main, run_deploy
from src.models.deployment import DeploymentResult
from src.services.errors import (
    ClientSetupFailed,
    FileOpenError,
    InvalidFileName,
    InvalidUpdateRequest,
    UpdateFailed,
    UploadFailed,
)

FULL_ENV = {
    "FILE_PATH": "dist/build.zip",
    "AWS_ACCESS_KEY_ID": "AKIAEXAMPLE",
    "AWS_SECRET_ACCESS_KEY": "s3cr3t",
    "AWS_REGION": "us-east-1",
    "BUCKET_ADDRESS": "artifacts",
    "FILE_NAME": "build.zip",
    "LAMBDA_FUNC": "my-function",
}


def _deploy_args(**overrides):
    args = dict(command='deploy', markers=True, publish=False, wait=False, json=False, verbose=False, quiet=False)
    args.update(overrides)
    return Namespace(**args)


class TestCLIMain(unittest.TestCase):
    def test_main_dispatches_deploy(self):
        handler = Mock()
        args = Namespace(command='deploy', func=handler)

        with patch('argparse.ArgumentParser.parse_args', return_value=args):
            main()

        handler.assert_called_once_with(args)

    def test_main_missing_command_shows_help_and_exits(self):
        args = Namespace(command=None)

        with patch('argparse.ArgumentParser.parse_args', return_value=args), \
             patch('argparse.ArgumentParser.print_help') as print_help_mock, \
             patch('cli.sys.exit', side_effect=SystemExit(1)) as exit_mock:
            with self.assertRaises(SystemExit):
                main()

        print_help_mock.assert_called_once()
        exit_mock.assert_called_once_with(1)


class TestRunDeploy(unittest.TestCase):
    def test_incomplete_env_exits_2_without_aws_calls(self):
        env = dict(FULL_ENV, FILE_NAME="")
        out = io.StringIO()

        with patch('cli.session_for') as session_mock, redirect_stdout(out):
            code = run_deploy(_deploy_args(), source=env)

        self.assertEqual(code, 2)
        session_mock.assert_not_called()
        self.assertIn("FILE_NAME", out.getvalue())

    def test_success_prints_key(self):
        result = DeploymentResult(function_name="my-function", bucket="artifacts", key="build-abc.zip")
        out = io.StringIO()

        with patch('cli.session_for'), patch('cli.S3Handler'), \
             patch('cli.LambdaCodeUpdater') as updater_mock, \
             patch('cli.deploy', return_value=result), redirect_stdout(out):
            code = run_deploy(_deploy_args(publish=True), source=FULL_ENV)

        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().strip(), "build-abc.zip")
        self.assertTrue(updater_mock.call_args.kwargs["publish"])

    def test_json_output(self):
        result = DeploymentResult(function_name="my-function", bucket="artifacts", key="build-abc.zip")
        out = io.StringIO()

        with patch('cli.session_for'), patch('cli.S3Handler'), patch('cli.LambdaCodeUpdater'), \
             patch('cli.deploy', return_value=result), redirect_stdout(out):
            run_deploy(_deploy_args(json=True), source=FULL_ENV)

        self.assertIn('"key": "build-abc.zip"', out.getvalue())

    def test_failure_maps_to_exit_code(self):
        cases = [
            (InvalidFileName, 3),
            (FileOpenError, 4),
            (UploadFailed, 5),
            (InvalidUpdateRequest, 6),
            (UpdateFailed, 7),
            (ClientSetupFailed, 8),
        ]
        for error_cls, expected in cases:
            with self.subTest(error=error_cls.__name__):
                with patch('cli.session_for'), patch('cli.S3Handler'), patch('cli.LambdaCodeUpdater'), \
                     patch('cli.deploy', side_effect=error_cls("boom")):
                    code = run_deploy(_deploy_args(), source=FULL_ENV)

                self.assertEqual(code, expected)

    def test_bad_region_is_reported_with_exit_code(self):
        env = dict(FULL_ENV, AWS_REGION="us east 1", FILE_PATH="/nonexistent/build.zip")
        out = io.StringIO()

        with patch.dict(os.environ), patch('cli.deploy') as deploy_mock, redirect_stdout(out):
            os.environ.pop("AWS_ENDPOINT_URL_S3", None)
            os.environ.pop("AWS_ENDPOINT_URL_LAMBDA", None)
            code = run_deploy(_deploy_args(), source=env)

        self.assertEqual(code, 8)
        deploy_mock.assert_not_called()
        self.assertIn("Failed to set up AWS clients", out.getvalue())

    def test_client_setup_value_error_is_mapped(self):
        out = io.StringIO()
        with patch('cli.session_for'), patch('cli.S3Handler', side_effect=ValueError("bad endpoint")), \
             redirect_stdout(out):
            code = run_deploy(_deploy_args(markers=False), source=FULL_ENV)

        self.assertEqual(code, 8)
        self.assertTrue(out.getvalue().startswith("Failed to set up AWS clients: bad endpoint"))

    def test_version_name_command(self):
        out = io.StringIO()
        with redirect_stdout(out):
            cli.version_name_command(Namespace(name="build.zip"))
        self.assertRegex(out.getvalue().strip(), r"^build-[0-9a-v]{20}\.zip$")

    def test_version_name_command_rejects_bad_name(self):
        with patch('cli.sys.exit', side_effect=SystemExit(3)) as exit_mock:
            with self.assertRaises(SystemExit):
                cli.version_name_command(Namespace(name="build"))
        exit_mock.assert_called_once_with(3)
