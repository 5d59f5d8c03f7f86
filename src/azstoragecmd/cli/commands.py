import sys

import click
import zirconium as zr
from autoinject import injector

from azstoragecmd.storage.errors import build_error_record
from azstoragecmd.commands import (
    CommandResult,
    NewShareCommand,
    SetFileContentCommand,
    ShareName,
    PublishContext,
    ServiceSettings,
)


def _storage_options(cb):
    cb = click.option("--client-request-id", default=None, help="Request id sent to the service for tracking.")(cb)
    cb = click.option("--client-timeout", default=None, type=int, help="Client side maximum time per request, in seconds (-1 for none).")(cb)
    cb = click.option("--server-timeout", default=None, type=int, help="Server side timeout per request, in seconds (-1 for none).")(cb)
    cb = click.option("--connection-string", default=None, help="Storage account connection string.")(cb)
    return cb


def _report(result: CommandResult):
    if not result.success:
        click.echo(str(result.error), err=True)
        sys.exit(1)
    if result.output is not None:
        click.echo(str(result.output))


@click.group
def main():
    pass


@main.command("new-share")
@click.argument("name")
@_storage_options
def new_share(name, connection_string, server_timeout, client_timeout, client_request_id):
    _report(NewShareCommand(
        name,
        connection_string=connection_string,
        server_timeout=server_timeout,
        client_timeout=client_timeout,
        client_request_id=client_request_id
    ).execute())


@main.command("set-file-content")
@click.argument("share_name")
@click.argument("source")
@click.argument("path", required=False, default=None)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
@click.option("--pass-thru", is_flag=True, default=False, help="Print the uploaded file.")
@_storage_options
def set_file_content(share_name, source, path, force, pass_thru, connection_string, server_timeout, client_timeout, client_request_id):
    cmd = SetFileContentCommand(
        ShareName(share_name),
        source,
        path,
        force=force,
        pass_thru=pass_thru,
        connection_string=connection_string,
        server_timeout=server_timeout,
        client_timeout=client_timeout,
        client_request_id=client_request_id
    )
    result = cmd.execute()
    if result.success and result.output is not None:
        result.output = f"{share_name}/{result.output.path()}"
    _report(result)


@main.command("publish-context")
@click.argument("package")
@click.option("--service-name", required=True)
@click.option("--cloud-config", required=True, help="Path to the service configuration file.")
@click.option("--slot", default="Production")
@click.option("--subscription", default=None, help="Subscription name, defaults to azure.subscription in the configuration.")
@click.option("--deployment-name", default=None)
@click.option("--working-dir", default=".")
@injector.inject
def publish_context(package, service_name, cloud_config, slot, subscription, deployment_name, working_dir, config: zr.ApplicationConfig = None):
    try:
        settings = ServiceSettings(
            slot=slot,
            subscription=subscription or config.as_str(("azure", "subscription"), default=None)
        )
        ctx = PublishContext(
            settings,
            package,
            cloud_config,
            service_name,
            deployment_name,
            working_dir,
            subscriptions=config.as_dict(("azure", "subscriptions"), default={})
        )
        ctx.config_package_settings(package, working_dir)
    except Exception as ex:
        _report(CommandResult(error=build_error_record(ex, "publish-context")))
        return
    click.echo(f"Service:      {ctx.service_name}")
    click.echo(f"Deployment:   {ctx.deployment_name}")
    click.echo(f"Subscription: {ctx.subscription_id}")
    click.echo(f"Package:      {ctx.package_path}")
    click.echo(f"From storage: {ctx.package_is_from_storage_account}")
