"""File management utilities."""

import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog

from ssh_client_hardener.exceptions import RollbackError
from ssh_client_hardener.types import FileBackup

logger = structlog.get_logger(__name__)


class FileManager:
    """Manage file operations with backup and rollback."""

    def __init__(self, backup_dir: Path) -> None:
        """Initialize file manager.

        Args:
            backup_dir: Directory for storing backups
        """
        self.backup_dir = backup_dir
        self.backups: List[FileBackup] = []
        # Files that did not exist before we wrote them
        self.created: List[Path] = []

    def backup_file(self, filepath: Path) -> Optional[Path]:
        """Create timestamped backup of file.

        Args:
            filepath: Path to file to backup

        Returns:
            Path to backup file or None if source doesn't exist
        """
        if not filepath.exists():
            return None

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = self.backup_dir / f"{filepath.name}.{timestamp}"

        shutil.copy2(filepath, backup_path)

        self.backups.append(
            FileBackup(
                original_path=str(filepath),
                backup_path=str(backup_path),
                timestamp=timestamp,
            )
        )
        logger.debug("file_backed_up", path=str(filepath), backup=str(backup_path))

        return backup_path

    def restore_file(self, backup_path: Path, original_path: Path) -> None:
        """Restore file from backup.

        Args:
            backup_path: Path to backup file
            original_path: Path where file should be restored
        """
        if not backup_path.exists():
            raise FileNotFoundError(f"Backup not found: {backup_path}")

        shutil.copy2(backup_path, original_path)

    def rollback_all(self) -> List[str]:
        """Undo every write made through this manager.

        Backed-up files are restored, newly created files are removed.

        Returns:
            List of restored or removed file paths

        Raises:
            RollbackError: If any file could not be restored
        """
        restored: List[str] = []
        failures: List[str] = []

        for point in reversed(self.backups):
            try:
                self.restore_file(Path(point.backup_path), Path(point.original_path))
                restored.append(point.original_path)
            except OSError as e:
                failures.append(f"{point.original_path}: {e}")

        for path in reversed(self.created):
            try:
                path.unlink()
                restored.append(str(path))
            except FileNotFoundError:
                continue
            except OSError as e:
                failures.append(f"{path}: {e}")

        self.backups.clear()
        self.created.clear()

        if failures:
            raise RollbackError("Could not restore: " + "; ".join(failures))

        return restored

    def write_file(self, filepath: Path, content: str) -> None:
        """Write content to file, creating parent directories.

        Args:
            filepath: Path to file
            content: Content to write
        """
        if not filepath.exists():
            self.created.append(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("file_written", path=str(filepath), size=len(content))
