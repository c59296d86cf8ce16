"""Type definitions for SSH Client Hardener."""

from enum import Enum
from typing import NamedTuple, Tuple, Union


class AddressFamily(str, Enum):
    """Values accepted by the AddressFamily directive."""

    ANY = "any"
    INET = "inet"


Scalar = Union[str, int]
DirectiveValue = Union[Scalar, Tuple[Scalar, ...]]


class FileBackup(NamedTuple):
    """Backup information for rollback."""

    original_path: str
    backup_path: str
    timestamp: str


class CommandResult(NamedTuple):
    """Result of command execution."""

    success: bool
    stdout: str
    stderr: str
    return_code: int = 0
