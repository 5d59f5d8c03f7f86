from __future__ import annotations
import dataclasses
import pathlib
import typing as t

from .errors import translate_local_error


DEFAULT_CHUNK_SIZE = 4194304


@dataclasses.dataclass(frozen=True)
class RequestOptions:
    """Per-request settings passed to every storage call.

        Timeouts are in seconds; None means no limit.
    """

    server_timeout: t.Optional[int] = None
    client_timeout: t.Optional[int] = None
    client_request_id: t.Optional[str] = None

    def call_kwargs(self) -> dict:
        kwargs = {}
        if self.server_timeout is not None:
            kwargs["timeout"] = self.server_timeout
        if self.client_request_id is not None:
            kwargs["client_request_id"] = self.client_request_id
        return kwargs


class BaseHandle:

    def __init__(self, options: t.Optional[RequestOptions] = None):
        self._cached_properties = {}
        self._options = options or RequestOptions()

    def __str__(self):
        return self.path()

    def clear_cache(self):
        """Clear the local cache of all values."""
        self._cached_properties = {}

    def _with_cache(self, key: str, callback: callable, *args, clear_cache: bool = False, **kwargs):
        if clear_cache or key not in self._cached_properties:
            self._cached_properties[key] = callback(*args, **kwargs)
        return self._cached_properties[key]

    def path(self) -> str:
        """Get the path of this handle relative to the share root."""
        raise NotImplementedError

    def name(self) -> str:
        """Get the name of the handle."""
        raise NotImplementedError

    def exists(self) -> bool:
        """Check if the handle exists on the remote side."""
        raise NotImplementedError


class FileHandle(BaseHandle):
    """A file in a remote share; it may not exist yet."""

    def create(self, size: int):
        """Create (or replace) the file with the given size."""
        raise NotImplementedError

    def upload(self, local_path: pathlib.Path, buffer_size: t.Optional[int] = None):
        """Write the contents of a local file into the (already created) remote file."""
        raise NotImplementedError

    @staticmethod
    def _local_read_chunks(local_path: pathlib.Path, buffer_size: t.Optional[int] = None) -> t.Iterable[bytes]:
        if buffer_size is None:
            buffer_size = DEFAULT_CHUNK_SIZE
        try:
            with open(local_path, "rb") as src:
                x = src.read(buffer_size)
                while x != b'':
                    yield x
                    x = src.read(buffer_size)
        except OSError as ex:
            raise translate_local_error(ex, local_path) from ex


class Container(BaseHandle):
    """A directory-like node in a share, either the root or nested."""

    def directory(self, segments: t.Sequence[str]) -> Container:
        """Get the directory reached by walking through the segments."""
        raise NotImplementedError

    def file(self, name: str) -> FileHandle:
        """Get a file directly in this directory."""
        raise NotImplementedError

    def file_by_path(self, segments: t.Sequence[str]) -> FileHandle:
        """Get the file named by the last segment, below the directories named by the rest."""
        if not segments:
            raise ValueError("A file path needs at least one segment")
        return self.directory(segments[:-1]).file(segments[-1])
