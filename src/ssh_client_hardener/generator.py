"""Generate and install the hardened SSH client configuration."""

from pathlib import Path
from typing import Optional

import structlog

from ssh_client_hardener.config import ClientHardenerConfig
from ssh_client_hardener.exceptions import (
    ConfigurationError,
    HardenerError,
    RollbackError,
    ValidationError,
)
from ssh_client_hardener.policy import DirectiveTable, PolicyInput, PolicyResolver
from ssh_client_hardener.renderer import ConfigRenderer
from ssh_client_hardener.utils.command import CommandExecutor
from ssh_client_hardener.utils.file import FileManager

logger = structlog.get_logger(__name__)

SSH_BINARIES = ("ssh", "/usr/bin/ssh", "/usr/local/bin/ssh")


class ClientConfigGenerator:
    """Resolve policy, render ssh_config and write it with rollback."""

    def __init__(
        self, config: ClientHardenerConfig, dry_run: bool = False, verbose: bool = False
    ) -> None:
        """Initialize generator.

        Args:
            config: Configuration object
            dry_run: If True, render only and never touch the filesystem
            verbose: Log extra detail about resolved directives
        """
        self.config = config
        self.dry_run = dry_run
        self.verbose = verbose

        self.resolver = PolicyResolver()
        self.renderer = ConfigRenderer(
            host_pattern=config.output.host_pattern, header=config.output.header
        )
        self.executor = CommandExecutor(dry_run=dry_run)
        self.file_manager = FileManager(config.backup.directory)

    def build_policy(self) -> PolicyInput:
        """Freeze the configured flags into a policy input."""
        return self.config.to_policy_input()

    def resolve(self) -> DirectiveTable:
        """Resolve the configured policy.

        Raises:
            InvalidPortError: If the configured ports are invalid
        """
        policy = self.build_policy()
        if policy.allow_legacy_ciphers or policy.allow_weak_mac or policy.allow_weak_kex:
            logger.warning(
                "weak_algorithms_enabled",
                legacy_ciphers=policy.allow_legacy_ciphers,
                weak_mac=policy.allow_weak_mac,
                weak_kex=policy.allow_weak_kex,
            )
        table = self.resolver.resolve(policy)
        if self.verbose:
            for key, value in table.items():
                logger.debug("directive", name=key, value=value)
        return table

    def generate(self) -> str:
        """Resolve and render, returning the ssh_config text."""
        return self.renderer.render(self.resolve())

    def run(self) -> str:
        """Generate the configuration and install it.

        Returns:
            The rendered configuration text

        Raises:
            HardenerError: If generation, writing or checking fails
        """
        output = self.config.output.path
        logger.info("Generating SSH client configuration", output=str(output))

        content = self.generate()

        if self.dry_run:
            logger.info("Dry run, configuration not written")
            return content

        issues = self.config.validate_config()
        if issues:
            for issue in issues:
                logger.error("preflight_issue", issue=issue)
            raise ConfigurationError("; ".join(issues))

        try:
            self.file_manager.backup_file(output)
            self.file_manager.write_file(output, content)
            if self.config.output.check_syntax:
                self.check_syntax(output)
        except KeyboardInterrupt as e:
            logger.warning("Interrupted by user, rolling back")
            self._rollback_after(e)
            raise
        except HardenerError as e:
            logger.error("Install failed", error=str(e))
            self._rollback_after(e)
            raise
        except OSError as e:
            logger.error("Install failed", error=str(e))
            self._rollback_after(e)
            raise HardenerError(f"Could not write {output}: {e}") from e

        logger.info("SSH client configuration written", output=str(output))
        return content

    def check_syntax(self, config_file: Path) -> None:
        """Ask the ssh client to parse ``config_file``.

        Raises:
            ValidationError: If ssh rejects the configuration
        """
        ssh_cmd = self._find_ssh()
        if ssh_cmd is None:
            logger.warning("Cannot validate SSH client config - ssh not found")
            return

        host = self.config.output.host_pattern
        # ssh -G needs a concrete host name
        if any(c in host for c in "*?!,"):
            host = "localhost"

        result = self.executor.execute(
            [ssh_cmd, "-G", "-F", str(config_file), host], check=False
        )
        if not result.success:
            raise ValidationError(f"Invalid SSH client config: {result.stderr.strip()}")
        logger.info("SSH client configuration validated")

    def rollback(self) -> None:
        """Rollback all changes.

        Raises:
            RollbackError: If rollback fails
        """
        logger.info("Rolling back changes")
        restored = self.file_manager.rollback_all()
        logger.info("Files restored", count=len(restored))

    def _rollback_after(self, error: BaseException) -> None:
        """Roll back, keeping ``error`` as the cause if that fails too."""
        try:
            self.rollback()
        except RollbackError as rollback_error:
            raise RollbackError(f"{rollback_error} (after: {error})") from error

    def _find_ssh(self) -> Optional[str]:
        for candidate in SSH_BINARIES:
            if self.executor.check_command_available(candidate):
                return candidate
        return None
