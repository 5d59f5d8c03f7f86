from __future__ import annotations
import dataclasses
import typing as t
import uuid

from autoinject import injector
import zrlog

from azstoragecmd.storage import StorageController, RequestOptions, AzureShareHandle
from azstoragecmd.storage.errors import ErrorRecord, build_error_record
from azstoragecmd.util import timestamped


DEFAULT_SERVER_TIMEOUT = 60
DEFAULT_CLIENT_TIMEOUT = 300
DEFAULT_TRANSFER_TIMEOUT = 3600

INFINITE_TIMEOUT = -1


def convert_timeout(seconds: int) -> t.Optional[int]:
    """Convert a user timeout in seconds; -1 means no limit."""
    if seconds > 0:
        return seconds
    elif seconds == INFINITE_TIMEOUT:
        return None
    raise ValueError(f"Invalid timeout value [{seconds}], must be a positive number of seconds or {INFINITE_TIMEOUT}")


@dataclasses.dataclass
class CommandResult:

    output: t.Any = None
    error: t.Optional[ErrorRecord] = None

    @property
    def success(self) -> bool:
        return self.error is None


class StorageCommand:
    """Base class for commands against a storage account.

        Subclasses implement _execute(); execute() reports any exception as a
        single ErrorRecord instead of raising it.
    """

    command_name: str = "storage"

    default_server_timeout: int = DEFAULT_SERVER_TIMEOUT
    default_client_timeout: int = DEFAULT_CLIENT_TIMEOUT

    controller: StorageController = None

    @injector.construct
    def __init__(self,
                 connection_string: t.Optional[str] = None,
                 server_timeout: t.Optional[int] = None,
                 client_timeout: t.Optional[int] = None,
                 client_request_id: t.Optional[str] = None):
        self.connection_string = connection_string
        self.server_timeout = server_timeout
        self.client_timeout = client_timeout
        self.client_request_id = client_request_id or str(uuid.uuid4())
        self._request_options: t.Optional[RequestOptions] = None
        self._log = zrlog.get_logger(f"azstoragecmd.{self.command_name}")

    def execute(self) -> CommandResult:
        try:
            return CommandResult(output=self._execute())
        except Exception as ex:
            record = build_error_record(ex, self.command_name)
            self._log.error(f"{self.command_name} failed [{self.client_request_id}]: {record}")
            return CommandResult(error=record)

    def _execute(self):
        raise NotImplementedError

    def request_options(self) -> RequestOptions:
        if self._request_options is None:
            if self.server_timeout is not None:
                server_timeout = convert_timeout(self.server_timeout)
            else:
                server_timeout = self.controller.default_timeout("server_timeout", self.default_server_timeout)
            if self.client_timeout is not None:
                client_timeout = convert_timeout(self.client_timeout)
            else:
                client_timeout = self.controller.default_timeout("client_timeout", self.default_client_timeout)
            self._request_options = RequestOptions(
                server_timeout=server_timeout,
                client_timeout=client_timeout,
                client_request_id=self.client_request_id
            )
        return self._request_options

    def share_from_name(self, share_name: str) -> AzureShareHandle:
        return self.controller.share(share_name, self.connection_string, self.request_options())

    def verbose(self, message: str):
        self._log.info(timestamped(message))

    def debug(self, message: str):
        self._log.debug(timestamped(message))
