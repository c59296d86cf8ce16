"""Tests for the configuration generator."""

import pytest
from structlog.testing import capture_logs

from ssh_client_hardener.exceptions import (
    ConfigurationError,
    HardenerError,
    InvalidPortError,
    RollbackError,
    ValidationError,
)
from ssh_client_hardener.generator import ClientConfigGenerator
from ssh_client_hardener.types import CommandResult


class FakeExecutor:
    """Record commands and return a canned result."""

    def __init__(self, result: CommandResult) -> None:
        self.result = result
        self.commands = []

    def execute(self, cmd, check=True, timeout=30):
        self.commands.append(list(cmd))
        return self.result

    @staticmethod
    def check_command_available(command):
        return command == "ssh"


def test_dry_run_writes_nothing(test_config):
    """Test dry run only renders."""
    content = ClientConfigGenerator(test_config, dry_run=True).run()
    assert "Host *" in content
    assert not test_config.output.path.exists()


def test_run_writes_file(test_config):
    """Test the rendered configuration is written, parents included."""
    content = ClientConfigGenerator(test_config).run()
    assert test_config.output.path.read_text() == content
    assert "    Port 22\n" in content


def test_run_backs_up_existing_file(test_config, temp_backup_dir):
    """Test an existing file is backed up before being replaced."""
    test_config.output.path.parent.mkdir(parents=True)
    test_config.output.path.write_text("Host old\n")

    ClientConfigGenerator(test_config).run()

    backups = list(temp_backup_dir.iterdir())
    assert len(backups) == 1
    assert backups[0].read_text() == "Host old\n"


def test_invalid_ports_abort_before_writing(test_config):
    """Test a bad port list fails without touching disk."""
    test_config.policy.ports = [0]
    with pytest.raises(InvalidPortError):
        ClientConfigGenerator(test_config).run()
    assert not test_config.output.path.exists()


def test_failed_check_restores_previous_file(test_config):
    """Test a rejected configuration is rolled back."""
    test_config.output.path.parent.mkdir(parents=True)
    test_config.output.path.write_text("Host old\n")
    test_config.output.check_syntax = True

    generator = ClientConfigGenerator(test_config)
    generator.executor = FakeExecutor(CommandResult(False, "", "Bad configuration option", 255))

    with pytest.raises(ValidationError, match="Bad configuration option"):
        generator.run()
    assert test_config.output.path.read_text() == "Host old\n"


def test_failed_check_removes_new_file(test_config):
    """Test a rejected configuration leaves no new file behind."""
    test_config.output.check_syntax = True

    generator = ClientConfigGenerator(test_config)
    generator.executor = FakeExecutor(CommandResult(False, "", "boom", 255))

    with pytest.raises(HardenerError):
        generator.run()
    assert not test_config.output.path.exists()


def test_check_syntax_command(test_config):
    """Test ssh -G is pointed at the written file."""
    test_config.output.check_syntax = True
    test_config.output.host_pattern = "bastion.example.com"

    generator = ClientConfigGenerator(test_config)
    fake = FakeExecutor(CommandResult(True, "", "", 0))
    generator.executor = fake
    generator.run()

    assert fake.commands == [
        ["ssh", "-G", "-F", str(test_config.output.path), "bastion.example.com"]
    ]


def test_check_syntax_uses_localhost_for_wildcards(test_config):
    """Test wildcard patterns are checked against localhost."""
    generator = ClientConfigGenerator(test_config)
    fake = FakeExecutor(CommandResult(True, "", "", 0))
    generator.executor = fake
    generator.check_syntax(test_config.output.path)
    assert fake.commands[0][-1] == "localhost"


def test_weak_flags_logged(test_config):
    """Test enabling weak algorithms emits a warning."""
    test_config.policy.allow_weak_kex = True
    with capture_logs() as logs:
        ClientConfigGenerator(test_config, dry_run=True).generate()

    warnings = [e for e in logs if e["event"] == "weak_algorithms_enabled"]
    assert len(warnings) == 1
    assert warnings[0]["log_level"] == "warning"
    assert warnings[0]["weak_kex"] is True


def test_unwritable_output_fails_before_writing(test_config, temp_backup_dir, tmp_path):
    """Test preflight issues abort the run before any file is touched."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory\n")
    test_config.output.path = blocker / "99-hardening.conf"

    generator = ClientConfigGenerator(test_config)
    with pytest.raises(ConfigurationError, match="is not writable"):
        generator.run()

    assert blocker.read_text() == "not a directory\n"
    assert list(temp_backup_dir.iterdir()) == []
    assert generator.file_manager.created == []


def test_failed_rollback_keeps_install_error(test_config, monkeypatch):
    """Test a failed rollback still reports why the install failed."""
    test_config.output.check_syntax = True

    generator = ClientConfigGenerator(test_config)
    generator.executor = FakeExecutor(CommandResult(False, "", "Bad configuration option", 255))

    def lost_backup():
        raise RollbackError("Could not restore: backup missing")

    monkeypatch.setattr(generator.file_manager, "rollback_all", lost_backup)

    with pytest.raises(RollbackError, match="Bad configuration option") as excinfo:
        generator.run()
    assert isinstance(excinfo.value.__cause__, ValidationError)
