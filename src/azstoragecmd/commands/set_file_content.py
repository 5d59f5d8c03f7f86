from __future__ import annotations
import dataclasses
import pathlib
import typing as t

from azstoragecmd.storage import AzureShareHandle, Container, FileHandle, resolve_upload_target
from azstoragecmd.storage.errors import PreconditionError, ResourceConflictError
from .base import StorageCommand, DEFAULT_TRANSFER_TIMEOUT


@dataclasses.dataclass(frozen=True)
class ShareName:
    name: str


@dataclasses.dataclass(frozen=True)
class ShareHandle:
    share: AzureShareHandle


@dataclasses.dataclass(frozen=True)
class DirectoryHandle:
    directory: Container


Destination = t.Union[ShareName, ShareHandle, DirectoryHandle]


class SetFileContentCommand(StorageCommand):
    """Upload a local file to a file share.

        The destination is a share (by name or handle) or a directory handle;
        path optionally names a file or directory below it. Existing files are
        only replaced when force is set. The uploaded file handle is returned
        only when pass_thru is set.
    """

    command_name = "set-file-content"

    default_server_timeout = DEFAULT_TRANSFER_TIMEOUT
    default_client_timeout = DEFAULT_TRANSFER_TIMEOUT

    def __init__(self,
                 destination: Destination,
                 source: t.Union[str, pathlib.Path],
                 path: t.Optional[str] = None,
                 force: bool = False,
                 pass_thru: bool = False,
                 *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.destination = destination
        self.source = source
        self.path = path
        self.force = force
        self.pass_thru = pass_thru

    def base_container(self) -> Container:
        """Resolve the destination to the directory the path is relative to."""
        if isinstance(self.destination, DirectoryHandle):
            return self.destination.directory
        elif isinstance(self.destination, ShareName):
            return self.share_from_name(self.destination.name).root()
        elif isinstance(self.destination, ShareHandle):
            return self.destination.share.root()
        raise ValueError(f"Invalid destination [{self.destination.__class__.__name__}]")

    def _execute(self) -> t.Optional[FileHandle]:
        local_file = pathlib.Path(self.source).expanduser().absolute()
        if not local_file.is_file():
            raise PreconditionError(f"Source file [{self.source}] not found")

        target = resolve_upload_target(local_file.name, self.path, self.base_container())
        self.debug(f"Resolved upload target [{target.path()}]")

        if not self.force and target.exists():
            raise ResourceConflictError(f"File [{target.name()}] already exists; use force to overwrite it")

        # Creating the file replaces any existing one
        target.create(local_file.stat().st_size)
        self.verbose(f"Uploading [{local_file}] to [{target.path()}]")
        target.upload(local_file)

        if self.pass_thru:
            return target
        return None
