"""Render a directive table as ssh_config text."""

from typing import FrozenSet, List, Mapping

from ssh_client_hardener.exceptions import ConfigurationError
from ssh_client_hardener.types import DirectiveValue

# Keys ssh_config accepts more than once; all other lists are comma-joined.
MULTI_VALUED_DIRECTIVES: FrozenSet[str] = frozenset({"Port"})

HEADER = (
    "# SSH Client Hardening Configuration",
    "# DO NOT EDIT MANUALLY - Generated by ssh-client-hardener",
)


class ConfigRenderer:
    """Serialize directives into a ``Host`` block.

    Output carries no timestamp: the same table always renders to the
    same bytes.
    """

    def __init__(self, host_pattern: str = "*", header: bool = True) -> None:
        if not host_pattern or any(c.isspace() for c in host_pattern):
            raise ConfigurationError(f"Invalid host pattern: {host_pattern!r}")
        self.host_pattern = host_pattern
        self.header = header

    def render(self, table: Mapping[str, DirectiveValue]) -> str:
        """Render ``table`` in its own iteration order.

        Args:
            table: Directive name to value

        Returns:
            ssh_config text ending with a newline
        """
        lines: List[str] = []
        if self.header:
            lines.extend(HEADER)
            lines.append("")

        lines.append(f"Host {self.host_pattern}")
        for key, value in table.items():
            for rendered in self.format_directive(key, value):
                lines.append(f"    {rendered}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def format_directive(key: str, value: DirectiveValue) -> List[str]:
        """Return the ``Key value`` line(s) for one directive."""
        if isinstance(value, (tuple, list)):
            if not value:
                raise ConfigurationError(f"Directive {key} has no values")
            if key in MULTI_VALUED_DIRECTIVES:
                return [f"{key} {item}" for item in value]
            return [f"{key} " + ",".join(str(item) for item in value)]
        return [f"{key} {value}"]
