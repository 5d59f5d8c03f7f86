import os
import typing as t

from autoinject import injector
from azure.identity import DefaultAzureCredential
from azure.storage.fileshare import ShareServiceClient
import zirconium as zr
import zrlog

from .azure_files import AzureShareHandle
from .base import RequestOptions
from .naming import validate_share_name


CONNECTION_STRING_ENVIRONMENT_NAME = "AZURE_STORAGE_CONNECTION_STRING"


@injector.injectable_global
class StorageController:
    """Builds clients and share handles for the configured storage account.

        The account is taken from, in order: an explicit connection string, the
        azure.storage.connection_string configuration value, the
        AZURE_STORAGE_CONNECTION_STRING environment variable, or the
        azure.storage.account_url configuration value used with the default
        Azure credential chain.
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self):
        self._log = zrlog.get_logger("azstoragecmd.storage")

    def default_timeout(self, name: str, fallback: t.Optional[int]) -> t.Optional[int]:
        """Get the configured default timeout (e.g. server_timeout), in seconds."""
        value = self.config.get(("azure", "storage", name), default=None)
        if value is None or value == "":
            return fallback
        return int(value)

    def connection_string(self, connection_string: t.Optional[str] = None) -> t.Optional[str]:
        if connection_string:
            return connection_string
        configured = self.config.as_str(("azure", "storage", "connection_string"), default=None)
        if configured:
            return configured
        from_env = os.environ.get(CONNECTION_STRING_ENVIRONMENT_NAME)
        if from_env:
            self._log.debug(f"Using storage account from environment variable {CONNECTION_STRING_ENVIRONMENT_NAME}")
            return from_env
        return None

    def service_client(self,
                       connection_string: t.Optional[str] = None,
                       options: t.Optional[RequestOptions] = None) -> ShareServiceClient:
        """Build a share service client for the storage account."""
        kwargs = {}
        if options is not None:
            kwargs["read_timeout"] = options.client_timeout
        conn_str = self.connection_string(connection_string)
        if conn_str:
            try:
                return ShareServiceClient.from_connection_string(conn_str, **kwargs)
            except ValueError:
                self._log.warning("Could not build a storage client from the connection string")
                raise
        account_url = self.config.as_str(("azure", "storage", "account_url"), default=None)
        if account_url:
            return ShareServiceClient(
                account_url,
                credential=DefaultAzureCredential(),
                token_intent="backup",
                **kwargs
            )
        raise ValueError("Default storage credentials not found; set a connection string or account URL")

    def share(self,
              share_name: str,
              connection_string: t.Optional[str] = None,
              options: t.Optional[RequestOptions] = None) -> AzureShareHandle:
        """Get a handle to the named share."""
        validate_share_name(share_name)
        client = self.service_client(connection_string, options)
        return AzureShareHandle(client.get_share_client(share_name), options)
