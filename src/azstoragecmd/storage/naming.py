"""Validation of share names and remote paths."""
import re
import typing as t

from .errors import InvalidResourceError


PATH_SEPARATORS = ("/", "\\")

MAX_FILE_NAME_LENGTH = 255

_INVALID_NAME_CHARACTERS = set('"\\/:|<>*?')

_SHARE_NAME_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9]|-(?=[a-z0-9]))*$")


def validate_share_name(share_name: t.Optional[str]) -> str:
    """Check the share name against the service rules and return it."""
    if share_name is None or not (3 <= len(share_name) <= 63) or not _SHARE_NAME_PATTERN.match(share_name):
        raise InvalidResourceError(f"Share name [{share_name}] is not valid")
    return share_name


def validate_file_name(name: str) -> str:
    """Check a single path segment and return it."""
    if not name or len(name) > MAX_FILE_NAME_LENGTH:
        raise InvalidResourceError(f"File or directory name [{name}] must be 1-{MAX_FILE_NAME_LENGTH} characters")
    for char in name:
        if char in _INVALID_NAME_CHARACTERS or ord(char) < 0x20:
            raise InvalidResourceError(f"File or directory name [{name}] contains an invalid character")
    return name


def validate_path(raw_path: t.Optional[str]) -> tuple[list[str], bool]:
    """Split a raw remote path into segments.

        Returns the segments and a flag that is True when the raw path is
        syntactically a directory: either empty or ending in a separator.
        Empty segments and '.' are dropped and '..' steps back one segment.
    """
    if not raw_path:
        return [], True
    is_directory = raw_path.endswith(PATH_SEPARATORS)
    segments = []
    for piece in re.split(r"[/\\]", raw_path):
        if piece == "" or piece == ".":
            continue
        if piece == "..":
            if not segments:
                raise InvalidResourceError(f"Path [{raw_path}] refers above the base directory")
            segments.pop()
            continue
        segments.append(validate_file_name(piece))
    return segments, is_directory
