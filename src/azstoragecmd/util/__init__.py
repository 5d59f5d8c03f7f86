import datetime
import typing as t
from .exceptions import StorageCmdError


def timestamped(message: str, when: t.Optional[datetime.datetime] = None) -> str:
    """Prefix a message with a time-of-day stamp, e.g. '14:03:59 - message'."""
    if when is None:
        when = datetime.datetime.now()
    return f"{when.strftime('%H:%M:%S')} - {message}"
