"""Input validation utilities."""

import os
from pathlib import Path
from typing import List, Sequence, Tuple

from ssh_client_hardener.exceptions import InvalidPortError

MIN_PORT = 1
MAX_PORT = 65535


class Validator:
    """Validate inputs and system state."""

    @staticmethod
    def validate_port(port: object) -> int:
        """Validate port number.

        Args:
            port: Port number to validate

        Returns:
            The port as an int

        Raises:
            InvalidPortError: If port is not an integer in 1-65535
        """
        # bool is an int subclass
        if isinstance(port, bool) or not isinstance(port, int):
            raise InvalidPortError(f"Invalid port: {port!r}. Must be an integer", port)
        if not (MIN_PORT <= port <= MAX_PORT):
            raise InvalidPortError(
                f"Invalid port: {port}. Must be between {MIN_PORT}-{MAX_PORT}", port
            )
        return port

    @classmethod
    def validate_ports(cls, ports: Sequence[object]) -> Tuple[int, ...]:
        """Validate an ordered port list.

        Args:
            ports: Ports in preference order

        Returns:
            The validated ports, order preserved

        Raises:
            InvalidPortError: If the list is empty or any port is invalid
        """
        if not ports:
            raise InvalidPortError("Invalid port list: empty list", None)
        return tuple(cls.validate_port(port) for port in ports)

    @classmethod
    def port_issues(cls, ports: Sequence[object]) -> List[str]:
        """Return validation messages instead of raising."""
        try:
            cls.validate_ports(ports)
        except InvalidPortError as e:
            return [str(e)]
        return []

    @staticmethod
    def validate_path_writable(path: Path) -> bool:
        """Check if path is writable.

        A missing parent directory counts as writable when its nearest
        existing ancestor is.

        Args:
            path: Path to check

        Returns:
            True if path is writable
        """
        if path.exists():
            return path.is_file() and os.access(path, os.W_OK)

        parent = path.parent
        while not parent.exists() and parent != parent.parent:
            parent = parent.parent
        return parent.is_dir() and os.access(parent, os.W_OK)
