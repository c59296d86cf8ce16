"""Policy resolution: security trade-off flags to ssh_config directives.

The resolver is a pure function of :class:`PolicyInput`. Every resolution
yields the same directive names in the same order; only the values of
``AddressFamily``, ``Port``, ``Ciphers``, ``MACs`` and ``KexAlgorithms``
depend on the input.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ssh_client_hardener.algorithms import CIPHERS, KEX_ALGORITHMS, MACS
from ssh_client_hardener.types import AddressFamily, DirectiveValue
from ssh_client_hardener.utils.validation import Validator

logger = structlog.get_logger(__name__)

DEFAULT_PORTS: Tuple[int, ...] = (22,)

DIRECTIVE_ORDER: Tuple[str, ...] = (
    # address family and protocol
    "AddressFamily",
    "Protocol",
    # connection
    "Port",
    "BatchMode",
    "CheckHostIP",
    "StrictHostKeyChecking",
    # cryptography
    "Ciphers",
    "MACs",
    "KexAlgorithms",
    # authentication and forwarding
    "ForwardAgent",
    "ForwardX11",
    "HostbasedAuthentication",
    "RhostsRSAAuthentication",
    "RSAAuthentication",
    "PasswordAuthentication",
    "GSSAPIAuthentication",
    "GSSAPIDelegateCredentials",
    "Tunnel",
    # misc
    "PermitLocalCommand",
    "Compression",
)

FIXED_DIRECTIVES: Mapping[str, DirectiveValue] = MappingProxyType(
    {
        "Protocol": 2,
        "BatchMode": "no",
        "CheckHostIP": "yes",
        "StrictHostKeyChecking": "ask",
        "ForwardAgent": "no",
        "ForwardX11": "no",
        "HostbasedAuthentication": "no",
        "RhostsRSAAuthentication": "no",
        "RSAAuthentication": "yes",
        "PasswordAuthentication": "no",
        "GSSAPIAuthentication": "no",
        "GSSAPIDelegateCredentials": "no",
        "Tunnel": "no",
        "PermitLocalCommand": "no",
        "Compression": "yes",
    }
)


class PolicyInput(BaseModel):
    """Security trade-offs requested by the caller."""

    model_config = ConfigDict(frozen=True)

    allow_legacy_ciphers: bool = Field(default=False)
    allow_weak_mac: bool = Field(default=False)
    allow_weak_kex: bool = Field(default=False)
    # Items are left as given; PolicyResolver.resolve is the only port check.
    ports: Tuple[Any, ...] = Field(default=DEFAULT_PORTS, description="Ports, primary first")
    ipv6_enabled: bool = Field(default=False)


class DirectiveTable(Mapping[str, DirectiveValue]):
    """Read-only, ordered mapping of directive name to value."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, DirectiveValue]) -> None:
        self._entries: Dict[str, DirectiveValue] = dict(entries)

    def __getitem__(self, key: str) -> DirectiveValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DirectiveTable({self._entries!r})"

    def as_dict(self) -> Dict[str, DirectiveValue]:
        """Return a mutable copy in directive order."""
        return dict(self._entries)


class PolicyResolver:
    """Resolve a :class:`PolicyInput` into a :class:`DirectiveTable`."""

    def resolve(self, policy: PolicyInput) -> DirectiveTable:
        """Resolve policy flags into the full directive catalog.

        Args:
            policy: Requested trade-offs

        Returns:
            Directive table in ``DIRECTIVE_ORDER``

        Raises:
            InvalidPortError: If ``ports`` is empty or holds a value
                outside 1-65535
        """
        ports = Validator.validate_ports(policy.ports)

        derived: Dict[str, DirectiveValue] = {
            "AddressFamily": self.address_family(policy.ipv6_enabled).value,
            "Port": ports,
            "Ciphers": CIPHERS.select(policy.allow_legacy_ciphers),
            "MACs": MACS.select(policy.allow_weak_mac),
            "KexAlgorithms": KEX_ALGORITHMS.select(policy.allow_weak_kex),
        }

        entries: Dict[str, DirectiveValue] = {}
        for name in DIRECTIVE_ORDER:
            entries[name] = derived[name] if name in derived else FIXED_DIRECTIVES[name]

        logger.debug(
            "policy_resolved",
            ports=list(ports),
            ipv6=policy.ipv6_enabled,
            legacy_ciphers=policy.allow_legacy_ciphers,
            weak_mac=policy.allow_weak_mac,
            weak_kex=policy.allow_weak_kex,
        )
        return DirectiveTable(entries)

    @staticmethod
    def address_family(ipv6_enabled: bool) -> AddressFamily:
        """IPv6 lets negotiation pick either family; otherwise IPv4 only."""
        return AddressFamily.ANY if ipv6_enabled else AddressFamily.INET


def resolve_policy(policy: Optional[PolicyInput] = None, **flags: object) -> DirectiveTable:
    """Resolve ``policy``, or a :class:`PolicyInput` built from ``flags``."""
    if policy is None:
        policy = PolicyInput(**flags)
    elif flags:
        raise TypeError("Pass either a PolicyInput or keyword flags, not both")
    return PolicyResolver().resolve(policy)
