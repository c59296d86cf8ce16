"""SSH Client Hardener - hardened ssh_config from a few security trade-offs."""

__version__ = "1.0.0"
__author__ = "DevOps Team"
__license__ = "MIT"

from ssh_client_hardener.exceptions import (
    HardenerError,
    ConfigurationError,
    InvalidPortError,
    ValidationError,
)
from ssh_client_hardener.generator import ClientConfigGenerator
from ssh_client_hardener.policy import (
    DirectiveTable,
    PolicyInput,
    PolicyResolver,
    resolve_policy,
)
from ssh_client_hardener.renderer import ConfigRenderer

__all__ = [
    "ClientConfigGenerator",
    "ConfigRenderer",
    "DirectiveTable",
    "PolicyInput",
    "PolicyResolver",
    "resolve_policy",
    "HardenerError",
    "ConfigurationError",
    "InvalidPortError",
    "ValidationError",
]
