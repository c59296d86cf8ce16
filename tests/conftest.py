"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest
import structlog

from ssh_client_hardener.config import ClientHardenerConfig
from ssh_client_hardener.policy import PolicyInput

ENV_PREFIXES = ("SSH_CLIENT_", "OUTPUT_", "BACKUP_", "LOG_")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the caller's environment and any local .env file."""
    for name in list(os.environ):
        if name.upper().startswith(ENV_PREFIXES):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def silent_logging():
    """Keep structlog output out of captured stdout."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def default_policy() -> PolicyInput:
    """Policy with every weak flag off and port 22."""
    return PolicyInput()


@pytest.fixture
def weak_policy() -> PolicyInput:
    """Policy with every weak flag on, two ports and IPv6."""
    return PolicyInput(
        allow_legacy_ciphers=True,
        allow_weak_mac=True,
        allow_weak_kex=True,
        ports=[22, 2222],
        ipv6_enabled=True,
    )


@pytest.fixture
def temp_backup_dir(tmp_path: Path) -> Path:
    """Create temporary backup directory."""
    backup_dir = tmp_path / "backups"
    backup_dir.mkdir()
    return backup_dir


@pytest.fixture
def test_config(tmp_path: Path, temp_backup_dir: Path) -> ClientHardenerConfig:
    """Create test configuration writing under tmp_path."""
    config = ClientHardenerConfig.from_env()
    config.output.path = tmp_path / "ssh_config.d" / "99-hardening.conf"
    config.backup.directory = temp_backup_dir
    return config
