"""Error taxonomy for storage commands and the translation of SDK faults into it.

    Every fault that reaches a user is reported as an ErrorRecord carrying a stable
    identifier (for scripts to branch on), a category and a human-readable detail string.
"""
from __future__ import annotations
import dataclasses
import enum
import functools
import typing as t

import requests
import urllib3.exceptions
import azure.core.exceptions as ace

from azstoragecmd.util import StorageCmdError


class ErrorCategory(enum.Enum):
    """Broad categories a shell can branch on."""

    NOT_SPECIFIED = "NotSpecified"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_OPERATION = "InvalidOperation"
    OBJECT_NOT_FOUND = "ObjectNotFound"
    METADATA_ERROR = "MetadataError"
    AUTHENTICATION_ERROR = "AuthenticationError"
    PERMISSION_DENIED = "PermissionDenied"
    NOT_IMPLEMENTED = "NotImplemented"
    OPERATION_TIMEOUT = "OperationTimeout"


class ErrorIds:

    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_RESOURCE = "InvalidResource"
    RESOURCE_ALREADY_EXISTS = "ResourceAlreadyExists"
    PATH_NOT_FOUND = "PathNotFound"
    PERMISSION_DENIED = "PermissionDenied"
    TIMEOUT = "Timeout"
    CONNECT_FAILURE = "ConnectFailure"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    UNKNOWN_ERROR = "UnknownError"


INVALID_RESOURCE_DETAILS = "The remote resource name or path is not valid."

# Storage error codes that all indicate the request itself named something unusable
_INVALID_RESOURCE_CODES = ("InvalidUri", "OutOfRangeInput", "UnsupportedHttpVerb")

_STATUS_CATEGORIES = {
    304: ErrorCategory.METADATA_ERROR,
    409: ErrorCategory.METADATA_ERROR,
    400: ErrorCategory.INVALID_ARGUMENT,
    401: ErrorCategory.AUTHENTICATION_ERROR,
    407: ErrorCategory.AUTHENTICATION_ERROR,
    403: ErrorCategory.PERMISSION_DENIED,
    501: ErrorCategory.NOT_IMPLEMENTED,
    408: ErrorCategory.OPERATION_TIMEOUT,
    504: ErrorCategory.OPERATION_TIMEOUT,
}


class ClassifiedError(StorageCmdError):
    """An error that already knows how it should be reported."""

    code_number: int = 2000
    category: ErrorCategory = ErrorCategory.NOT_SPECIFIED
    error_id: str = ErrorIds.UNKNOWN_ERROR

    def __init__(self,
                 details: str,
                 error_id: t.Optional[str] = None,
                 category: t.Optional[ErrorCategory] = None,
                 is_recoverable: bool = False):
        super().__init__(details, "AZFILE", self.code_number, is_recoverable=is_recoverable)
        self.details = details
        if error_id is not None:
            self.error_id = error_id
        if category is not None:
            self.category = category

    def error_record(self, target: t.Optional[str] = None) -> ErrorRecord:
        return ErrorRecord(self.error_id, self.category, self.details, self, target)


class PreconditionError(ClassifiedError):
    """Raised before any remote call when a local precondition (e.g. the source file) fails."""

    code_number = 1000
    category = ErrorCategory.OBJECT_NOT_FOUND
    error_id = ErrorIds.PATH_NOT_FOUND


class ResourceConflictError(ClassifiedError):

    code_number = 1001
    category = ErrorCategory.INVALID_ARGUMENT
    error_id = ErrorIds.RESOURCE_ALREADY_EXISTS


class InvalidResourceError(ClassifiedError):

    code_number = 1002
    category = ErrorCategory.INVALID_ARGUMENT
    error_id = ErrorIds.INVALID_RESOURCE

    def __init__(self, details: str = INVALID_RESOURCE_DETAILS, *args, **kwargs):
        super().__init__(details, *args, **kwargs)


class PathNotFoundError(ClassifiedError):

    code_number = 1003
    category = ErrorCategory.OBJECT_NOT_FOUND
    error_id = ErrorIds.PATH_NOT_FOUND


class OperationTimeoutError(ClassifiedError):

    code_number = 2001
    category = ErrorCategory.OPERATION_TIMEOUT
    error_id = ErrorIds.TIMEOUT

    def __init__(self, details: str, *args, is_recoverable: bool = True, **kwargs):
        super().__init__(details, *args, is_recoverable=is_recoverable, **kwargs)


class AuthenticationError(ClassifiedError):

    code_number = 2003
    category = ErrorCategory.AUTHENTICATION_ERROR
    error_id = ErrorIds.AUTHENTICATION_FAILED


class PermissionDeniedError(ClassifiedError):

    code_number = 2004
    category = ErrorCategory.PERMISSION_DENIED
    error_id = ErrorIds.PERMISSION_DENIED


class UnknownBackendError(ClassifiedError):

    code_number = 2000


@dataclasses.dataclass
class ErrorRecord:
    """What a command reports for a failure."""

    error_id: str
    category: ErrorCategory
    details: t.Optional[str]
    exception: BaseException
    target: t.Optional[str] = None

    def __str__(self):
        return f"{self.error_id} ({self.category.value}): {self.details or str(self.exception)}"


def classify_status(status_code: t.Optional[int],
                    error_code: t.Optional[str] = None,
                    inner_kind: t.Optional[str] = None,
                    status_message: t.Optional[str] = None,
                    error_message: t.Optional[str] = None) -> tuple[ErrorCategory, str, t.Optional[str]]:
    """Classify a backend response into (category, identifier, details).

        inner_kind is one of "timeout", "connection", None (no inner fault) or
        the class name of some other inner fault.
    """
    category = _STATUS_CATEGORIES.get(status_code, ErrorCategory.INVALID_OPERATION)
    details = status_message
    if error_code:
        if error_code in _INVALID_RESOURCE_CODES:
            return category, ErrorIds.INVALID_RESOURCE, INVALID_RESOURCE_DETAILS
        return category, error_code, error_message or details
    if inner_kind is None:
        return category, ErrorIds.UNKNOWN_ERROR, details
    if inner_kind == "timeout":
        return ErrorCategory.OPERATION_TIMEOUT, ErrorIds.TIMEOUT, error_message or details
    if inner_kind == "connection":
        return category, ErrorIds.CONNECT_FAILURE, details
    return category, inner_kind, details


def inner_fault_kind(ex: BaseException) -> t.Optional[str]:
    """Name the kind of transport fault underneath an SDK error, if any."""
    if isinstance(ex, (ace.ServiceRequestTimeoutError, ace.ServiceResponseTimeoutError)):
        return "timeout"
    inner = getattr(ex, "inner_exception", None)
    if inner is None:
        return None
    if isinstance(inner, (urllib3.exceptions.TimeoutError, requests.Timeout, TimeoutError)):
        return "timeout"
    if isinstance(inner, (urllib3.exceptions.NewConnectionError, requests.ConnectionError, ConnectionError)):
        return "connection"
    return inner.__class__.__name__


def is_malformed_request(ex: BaseException) -> bool:
    """Check for a 400 response that carries no storage error code.

        The service answers this way when the request path itself cannot be parsed.
    """
    return (
        isinstance(ex, ace.HttpResponseError)
        and ex.status_code == 400
        and not getattr(ex, "error_code", None)
    )


def _classify_http_error(ex: ace.HttpResponseError) -> tuple[ErrorCategory, str, t.Optional[str]]:
    return classify_status(
        ex.status_code,
        getattr(ex, "error_code", None),
        inner_fault_kind(ex),
        ex.reason,
        ex.message
    )


def translate_azure_error(ex: ace.AzureError) -> ClassifiedError:
    """Convert an SDK error into the matching taxonomy error."""
    if isinstance(ex, ace.HttpResponseError) and ex.status_code is not None:
        category, error_id, details = _classify_http_error(ex)
        details = details or str(ex)
        if error_id == ErrorIds.INVALID_RESOURCE:
            return InvalidResourceError(details)
        if category == ErrorCategory.OPERATION_TIMEOUT:
            return OperationTimeoutError(details, error_id)
        if category == ErrorCategory.AUTHENTICATION_ERROR:
            return AuthenticationError(details, error_id)
        if category == ErrorCategory.PERMISSION_DENIED:
            return PermissionDeniedError(details, error_id)
        if ex.status_code == 404:
            return PathNotFoundError(details, error_id)
        return UnknownBackendError(details, error_id, category, is_recoverable=ex.status_code >= 500)
    if isinstance(ex, ace.ClientAuthenticationError):
        return AuthenticationError(f"Azure: {ex.__class__.__name__}: {str(ex)}")
    kind = inner_fault_kind(ex)
    if kind == "timeout":
        return OperationTimeoutError(f"Azure: Connection timeout error: {str(ex)}")
    if kind == "connection":
        return UnknownBackendError(f"Azure: Connection error: {str(ex)}", ErrorIds.CONNECT_FAILURE, is_recoverable=True)
    return UnknownBackendError(f"Azure: {ex.__class__.__name__}: {str(ex)}", kind)


def wrap_azure_errors(cb):
    """Converts SDK errors raised by the callback into taxonomy errors."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except ace.AzureError as ex:
            raise translate_azure_error(ex) from ex

    return _inner


def translate_local_error(ex: OSError, path) -> ClassifiedError:
    """Convert a local file-system error into the matching taxonomy error."""
    if isinstance(ex, FileNotFoundError):
        return PathNotFoundError(f"Local file [{path}] not found")
    if isinstance(ex, PermissionError):
        return PermissionDeniedError(f"Access to local file [{path}] denied", is_recoverable=True)
    if isinstance(ex, (IsADirectoryError, NotADirectoryError)):
        return PreconditionError(f"Local path [{path}] is not a file", ErrorIds.INVALID_ARGUMENT, ErrorCategory.INVALID_ARGUMENT)
    return UnknownBackendError(f"Exception processing local file: {ex.__class__.__name__}: {str(ex)}", ex.__class__.__name__)


def build_error_record(ex: BaseException, target: t.Optional[str] = None) -> ErrorRecord:
    """Build the record a command reports for any exception."""
    if isinstance(ex, ClassifiedError):
        return ex.error_record(target)
    if isinstance(ex, (ValueError, TypeError)):
        return ErrorRecord(ErrorIds.INVALID_ARGUMENT, ErrorCategory.INVALID_ARGUMENT, str(ex), ex, target)
    if isinstance(ex, (FileNotFoundError, NotADirectoryError)):
        return ErrorRecord(ErrorIds.PATH_NOT_FOUND, ErrorCategory.OBJECT_NOT_FOUND, str(ex), ex, target)
    if isinstance(ex, (TimeoutError, ace.ServiceRequestTimeoutError, ace.ServiceResponseTimeoutError)):
        return ErrorRecord(ErrorIds.TIMEOUT, ErrorCategory.OPERATION_TIMEOUT, str(ex), ex, target)
    if isinstance(ex, ace.HttpResponseError) and ex.status_code is not None:
        category, error_id, details = _classify_http_error(ex)
        return ErrorRecord(error_id, category, details or None, ex, target)
    if isinstance(ex, ace.AzureError):
        # Transport and credential faults are reported the same way wrap_azure_errors would
        record = translate_azure_error(ex).error_record(target)
        record.exception = ex
        return record
    return ErrorRecord(ex.__class__.__name__, ErrorCategory.NOT_SPECIFIED, str(ex), ex, target)
