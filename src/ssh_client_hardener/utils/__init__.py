"""Utility modules for SSH Client Hardener."""

from ssh_client_hardener.utils.command import CommandExecutor
from ssh_client_hardener.utils.file import FileManager
from ssh_client_hardener.utils.validation import Validator

__all__ = ["CommandExecutor", "FileManager", "Validator"]
