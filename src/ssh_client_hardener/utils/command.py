"""Command execution utilities."""

import shutil
import subprocess
from typing import Sequence

from ssh_client_hardener.exceptions import CommandExecutionError
from ssh_client_hardener.types import CommandResult


class CommandExecutor:
    """Execute system commands with proper error handling."""

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize command executor.

        Args:
            dry_run: If True, only report commands without executing
        """
        self.dry_run = dry_run

    def execute(
        self,
        cmd: Sequence[str],
        check: bool = True,
        timeout: int = 30,
    ) -> CommandResult:
        """Execute a command without a shell.

        Args:
            cmd: Program and arguments
            check: Whether to raise exception on failure
            timeout: Command timeout in seconds

        Returns:
            CommandResult with execution details

        Raises:
            CommandExecutionError: If command fails and check=True
        """
        printable = " ".join(cmd)

        if self.dry_run:
            return CommandResult(True, f"[DRY RUN] {printable}", "", 0)

        try:
            result = subprocess.run(
                list(cmd),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            error_msg = f"Command timed out after {timeout}s: {printable}"
            if check:
                raise CommandExecutionError(error_msg) from e
            return CommandResult(False, "", error_msg, -1)
        except OSError as e:
            error_msg = f"Command execution failed: {printable}\nError: {e}"
            if check:
                raise CommandExecutionError(error_msg) from e
            return CommandResult(False, "", error_msg, -1)

        cmd_result = CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
            return_code=result.returncode,
        )

        if check and not cmd_result.success:
            raise CommandExecutionError(
                f"Command failed: {printable}\nError: {result.stderr}"
            )

        return cmd_result

    @staticmethod
    def check_command_available(command: str) -> bool:
        """Check if command is available on system."""
        return shutil.which(command) is not None
