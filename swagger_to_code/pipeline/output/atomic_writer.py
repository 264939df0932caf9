"""
Atomic file writer for the generated client.

Ensures that file writes are atomic to prevent leaving half-written sources
from interrupted runs, and removes files a previous run generated that are
no longer produced.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes the rendered files under an output directory.

    Every file is written to a temporary file in the same directory, then
    atomically replaces the target, so an interrupted run never leaves a
    file in an incomplete state.
    """

    # Directories whose sources are all generated
    GENERATED_DIRS = ("models", "services")

    GENERATED_SUFFIX = ".ts"

    def __init__(self, remove_stale_files: bool = True, optional_files: Iterable[str] = ()):
        """Initialize the writer.

        Args:
            remove_stale_files: Whether generated files not produced by this run are deleted
            optional_files: Top-level files that are only generated when enabled
                (indexes, module), removed when a run does not produce them
        """
        self.remove_stale_files = remove_stale_files
        self.optional_files = list(optional_files)

    def write_all(self, output_dir: Path | str, files: dict[str, str]) -> list[Path]:
        """Write all files and clean up stale ones.

        Args:
            output_dir: Root of the generated client
            files: Sources keyed by path relative to output_dir

        Returns:
            The paths that were written
        """
        output_dir = Path(output_dir)
        written = []
        for relative, content in files.items():
            path = output_dir / relative
            self.write(path, content)
            written.append(path)

        if self.remove_stale_files:
            self.remove_stale(output_dir, files)
        return written

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Wrote %s", path)

    def remove_stale(self, output_dir: Path, files: dict[str, str]) -> list[Path]:
        """Remove generated files that were not produced by this run.

        Args:
            output_dir: Root of the generated client
            files: Sources produced by this run, keyed by relative path

        Returns:
            The paths that were removed
        """
        produced = {Path(relative).as_posix() for relative in files}
        candidates: list[Path] = []
        for directory in self.GENERATED_DIRS:
            folder = output_dir / directory
            if folder.is_dir():
                candidates.extend(sorted(folder.glob(f"*{self.GENERATED_SUFFIX}")))
        candidates.extend(output_dir / name for name in self.optional_files)

        removed = []
        for path in candidates:
            if not path.is_file() or path.relative_to(output_dir).as_posix() in produced:
                continue
            logger.info("Removing stale file %s", path)
            path.unlink()
            removed.append(path)
        return removed
