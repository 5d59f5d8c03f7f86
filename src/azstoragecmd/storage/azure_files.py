from __future__ import annotations
import pathlib
import typing as t

from azure.storage.fileshare import ShareClient, ShareDirectoryClient, ShareFileClient, FileProperties
from azure.core.exceptions import ResourceNotFoundError

from .base import Container, FileHandle, RequestOptions
from .errors import wrap_azure_errors


def _join(segments: t.Sequence[str]) -> str:
    return "/".join(segments)


class AzureShareHandle:
    """A file share; its root directory is the base for most operations."""

    def __init__(self, share_client: ShareClient, options: t.Optional[RequestOptions] = None):
        self._client = share_client
        self._options = options or RequestOptions()

    def __str__(self):
        return self.name()

    def name(self) -> str:
        return self._client.share_name

    @wrap_azure_errors
    def create(self):
        self._client.create_share(**self._options.call_kwargs())

    def root(self) -> AzureDirectoryHandle:
        return AzureDirectoryHandle(self._client, (), self._options)


class AzureDirectoryHandle(Container):

    def __init__(self, share_client: ShareClient, segments: t.Sequence[str] = (), options: t.Optional[RequestOptions] = None):
        super().__init__(options)
        self._share_client = share_client
        self._segments = tuple(segments)

    def __eq__(self, other):
        return (
            isinstance(other, AzureDirectoryHandle)
            and other.share_name() == self.share_name()
            and other.segments() == self.segments()
        )

    def share_name(self) -> str:
        return self._share_client.share_name

    def segments(self) -> tuple[str, ...]:
        return self._segments

    def path(self) -> str:
        return _join(self._segments)

    def name(self) -> str:
        return self._segments[-1] if self._segments else ""

    def client(self) -> ShareDirectoryClient:
        return self._with_cache('client', self._share_client.get_directory_client, self.path())

    def directory(self, segments: t.Sequence[str]) -> AzureDirectoryHandle:
        return AzureDirectoryHandle(self._share_client, self._segments + tuple(segments), self._options)

    def file(self, name: str) -> AzureFileHandle:
        return AzureFileHandle(self._share_client, self._segments + (name,), self._options)

    def exists(self) -> bool:
        # SDK errors are left as-is so the caller can inspect the raw response
        return self.client().exists(**self._options.call_kwargs())

    @wrap_azure_errors
    def create_with_parents(self):
        """Create this directory and every missing directory above it."""
        for i in range(1, len(self._segments) + 1):
            client = self._share_client.get_directory_client(_join(self._segments[:i]))
            if not client.exists(**self._options.call_kwargs()):
                client.create_directory(**self._options.call_kwargs())


class AzureFileHandle(FileHandle):

    def __init__(self, share_client: ShareClient, segments: t.Sequence[str], options: t.Optional[RequestOptions] = None):
        super().__init__(options)
        self._share_client = share_client
        self._segments = tuple(segments)

    def __eq__(self, other):
        return (
            isinstance(other, AzureFileHandle)
            and other.share_name() == self.share_name()
            and other.segments() == self.segments()
        )

    def share_name(self) -> str:
        return self._share_client.share_name

    def segments(self) -> tuple[str, ...]:
        return self._segments

    def path(self) -> str:
        return _join(self._segments)

    def name(self) -> str:
        return self._segments[-1]

    def parent(self) -> AzureDirectoryHandle:
        return AzureDirectoryHandle(self._share_client, self._segments[:-1], self._options)

    def client(self) -> ShareFileClient:
        return self._with_cache('client', self._share_client.get_file_client, self.path())

    @wrap_azure_errors
    def exists(self, clear_cache: bool = False) -> bool:
        try:
            self.properties(clear_cache)
            return True
        except ResourceNotFoundError:
            return False

    def properties(self, clear_cache: bool = False) -> FileProperties:
        return self._with_cache('properties', self._properties, clear_cache=clear_cache)

    def _properties(self) -> FileProperties:
        return self.client().get_file_properties(**self._options.call_kwargs())

    @wrap_azure_errors
    def size(self, clear_cache: bool = False) -> int:
        return self.properties(clear_cache).size

    @wrap_azure_errors
    def create(self, size: int, create_parents: bool = True):
        if create_parents and len(self._segments) > 1:
            self.parent().create_with_parents()
        self.client().create_file(size, **self._options.call_kwargs())
        self.clear_cache()

    @wrap_azure_errors
    def upload(self, local_path: pathlib.Path, buffer_size: t.Optional[int] = None):
        client = self.client()
        offset = 0
        for chunk in self._local_read_chunks(local_path, buffer_size):
            client.upload_range(chunk, offset=offset, length=len(chunk), **self._options.call_kwargs())
            offset += len(chunk)
        self.clear_cache()

