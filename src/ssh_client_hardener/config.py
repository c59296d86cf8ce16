"""Configuration management for SSH Client Hardener."""

import os
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ssh_client_hardener.policy import PolicyInput
from ssh_client_hardener.utils.validation import Validator


def _default_backup_dir() -> Path:
    # Use user home if not root
    if os.geteuid() != 0:
        return Path.home() / "security_backups"
    return Path("/root/security_backups")


class PolicySettings(BaseSettings):
    """Security trade-off flags."""

    allow_legacy_ciphers: bool = Field(default=False, description="Offer CBC ciphers")
    allow_weak_mac: bool = Field(default=False, description="Offer hmac-sha1")
    allow_weak_kex: bool = Field(default=False, description="Offer SHA-1 key exchange")
    ports: Annotated[List[int], NoDecode] = Field(
        default_factory=lambda: [22], description="SSH ports, primary first"
    )
    ipv6_enabled: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="SSH_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ports", mode="before")
    @classmethod
    def parse_ports(cls, v: object) -> object:
        """Parse ports from comma-separated string or list."""
        if isinstance(v, str):
            return [p.strip() for p in v.split(",") if p.strip()]
        if isinstance(v, int) and not isinstance(v, bool):
            return [v]
        return v


class OutputConfig(BaseSettings):
    """Where and how the client configuration is written."""

    path: Path = Field(default=Path("/etc/ssh/ssh_config.d/99-hardening.conf"))
    host_pattern: str = Field(default="*")
    header: bool = Field(default=True)
    check_syntax: bool = Field(default=False, description="Run ssh -G on the result")

    model_config = SettingsConfigDict(
        env_prefix="OUTPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class BackupConfig(BaseSettings):
    """Backup configuration."""

    directory: Path = Field(default_factory=_default_backup_dir)

    model_config = SettingsConfigDict(
        env_prefix="BACKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file: Optional[Path] = Field(default=None)
    json_format: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ClientHardenerConfig(BaseSettings):
    """Main configuration container."""

    policy: PolicySettings = Field(default_factory=PolicySettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "ClientHardenerConfig":
        """Create configuration from environment variables."""
        return cls(
            policy=PolicySettings(),
            output=OutputConfig(),
            backup=BackupConfig(),
            logging=LoggingConfig(),
        )

    def to_policy_input(self) -> PolicyInput:
        """Freeze the policy flags for resolution."""
        return PolicyInput(
            allow_legacy_ciphers=self.policy.allow_legacy_ciphers,
            allow_weak_mac=self.policy.allow_weak_mac,
            allow_weak_kex=self.policy.allow_weak_kex,
            ports=tuple(self.policy.ports),
            ipv6_enabled=self.policy.ipv6_enabled,
        )

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues."""
        issues: List[str] = Validator.port_issues(self.policy.ports)

        if not self.output.host_pattern or any(
            c.isspace() for c in self.output.host_pattern
        ):
            issues.append(f"Invalid host pattern: {self.output.host_pattern!r}")

        if not Validator.validate_path_writable(self.output.path):
            issues.append(f"Output path {self.output.path} is not writable")

        return issues
