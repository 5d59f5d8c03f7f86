"""Decides which remote file an upload should write to."""
import typing as t

import azure.core.exceptions as ace

from .base import Container, FileHandle
from .errors import InvalidResourceError, is_malformed_request
from .naming import validate_path


def resolve_upload_target(default_file_name: str, raw_path: t.Optional[str], base_container: Container) -> FileHandle:
    """Find the file an upload of default_file_name to raw_path should target.

        An empty path or one ending in a separator names a directory and needs
        no remote call. Otherwise the path is ambiguous and a single existence
        probe decides: an existing directory receives default_file_name, any
        other path is taken as the file itself. Nothing is created here; the
        directories above a resolved file may not exist yet.
    """
    segments, looks_like_directory = validate_path(raw_path)
    if not segments:
        return base_container.file(default_file_name)
    directory = base_container.directory(segments)
    if looks_like_directory:
        return directory.file(default_file_name)
    try:
        directory_exists = directory.exists()
    except ace.HttpResponseError as ex:
        if is_malformed_request(ex):
            raise InvalidResourceError() from ex
        raise
    if directory_exists:
        return directory.file(default_file_name)
    return base_container.file_by_path(segments)
