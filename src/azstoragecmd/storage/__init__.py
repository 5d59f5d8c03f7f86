"""
    Provides handles to shares, directories and files in an Azure file share.

    In general, one should use the StorageController to get a handle to a share.
    Handles are cheap: building one never calls the service. Only methods like
    exists(), create() and upload() make a request.

    One key note: a remote path such as

    reports/2024

    is ambiguous, since it may name a directory or a file. Paths that end with a
    separator (e.g. reports/2024/) are always directories. For the rest,
    resolve_upload_target() asks the service whether a directory exists there.
"""
from .base import Container, FileHandle, RequestOptions
from .azure_files import AzureShareHandle, AzureDirectoryHandle, AzureFileHandle
from .core import StorageController
from .resolver import resolve_upload_target
