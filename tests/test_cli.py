import unittest as ut
from unittest import mock

from click.testing import CliRunner

from azstoragecmd.cli.commands import main
from azstoragecmd.commands import CommandResult, ShareName
from azstoragecmd.storage.errors import ResourceConflictError


class TestCli(ut.TestCase):

    def test_set_file_content(self):
        target = mock.MagicMock()
        target.path.return_value = "logs/out.txt"
        with mock.patch("azstoragecmd.cli.commands.SetFileContentCommand") as cmd_cls:
            cmd_cls.return_value.execute.return_value = CommandResult(output=target)
            result = CliRunner().invoke(main, ["set-file-content", "data", "out.txt", "logs/", "--pass-thru", "--server-timeout", "5"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "data/logs/out.txt")
        args, kwargs = cmd_cls.call_args
        self.assertEqual(args, (ShareName("data"), "out.txt", "logs/"))
        self.assertTrue(kwargs["pass_thru"])
        self.assertFalse(kwargs["force"])
        self.assertEqual(kwargs["server_timeout"], 5)

    def test_set_file_content_error(self):
        error = ResourceConflictError("File [out.txt] already exists")
        with mock.patch("azstoragecmd.cli.commands.SetFileContentCommand") as cmd_cls:
            cmd_cls.return_value.execute.return_value = CommandResult(error=error.error_record())
            result = CliRunner().invoke(main, ["set-file-content", "data", "out.txt"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("ResourceAlreadyExists (InvalidArgument): File [out.txt] already exists", result.output)

    def test_new_share(self):
        share = mock.MagicMock()
        share.__str__.return_value = "data"
        with mock.patch("azstoragecmd.cli.commands.NewShareCommand") as cmd_cls:
            cmd_cls.return_value.execute.return_value = CommandResult(output=share)
            result = CliRunner().invoke(main, ["new-share", "data"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "data")

    def test_publish_context(self):
        with mock.patch("azstoragecmd.cli.commands.PublishContext") as ctx_cls:
            ctx = ctx_cls.return_value
            ctx.service_name = "svc"
            ctx.deployment_name = "p2024-05-01-13-45-10-0000"
            ctx.subscription_id = "sub-id"
            ctx.package_path = "https://acct.blob.core.windows.net/pkgs/svc.cspkg"
            ctx.package_is_from_storage_account = True
            result = CliRunner().invoke(main, [
                "publish-context", "https://acct.blob.core.windows.net/pkgs/svc.cspkg",
                "--service-name", "svc",
                "--cloud-config", "svc.cscfg",
                "--subscription", "main",
            ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Service:      svc", result.output)
        self.assertIn("Subscription: sub-id", result.output)
        self.assertIn("From storage: True", result.output)
        ctx.config_package_settings.assert_called_once_with("https://acct.blob.core.windows.net/pkgs/svc.cspkg", ".")
        settings = ctx_cls.call_args[0][0]
        self.assertEqual(settings.slot, "Production")
        self.assertEqual(settings.subscription, "main")

    def test_publish_context_missing_cloud_config(self):
        result = CliRunner().invoke(main, [
            "publish-context", "svc.cspkg",
            "--service-name", "svc",
            "--cloud-config", "does-not-exist.cscfg",
            "--subscription", "main",
        ])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("PathNotFound (ObjectNotFound): Service configuration file [does-not-exist.cscfg] not found", result.output)
