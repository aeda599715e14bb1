"""
Project writer.

Writes rendered files under an output directory. All destinations are
checked before the first file is written, and files are staged as
.tmp siblings and moved into place so a failure leaves nothing partial.
"""

import logging
from pathlib import Path
from typing import Dict, List, Tuple

from stmgen.chips.errors import StmgenError

from .renderer import RenderedFile

logger = logging.getLogger(__name__)


class ProjectWriteError(StmgenError):
    """Exception raised when the project cannot be written."""

    pass


def write_project(
    output_dir: Path, files: List[RenderedFile], force: bool = False
) -> List[Path]:
    """
    Write rendered files to disk.

    Args:
        output_dir: Project root to write into (created if missing)
        files: Rendered files with paths relative to output_dir
        force: Overwrite existing files

    Returns:
        List of written file paths

    Raises:
        ProjectWriteError: If a destination escapes output_dir, is a
            directory, or already exists and force is False, or if writing
            fails (everything written so far is rolled back first)
    """
    root = output_dir.resolve()
    targets = []
    for rendered in files:
        target = (root / rendered.path).resolve()
        if root not in target.parents:
            raise ProjectWriteError(f"Refusing to write outside {root}: {rendered.path}")
        if target.is_dir():
            raise ProjectWriteError(f"Destination is a directory: {target}")
        if target.exists() and not force:
            raise ProjectWriteError(
                f"File already exists: {target} (use --force to overwrite)"
            )
        targets.append((target, rendered))

    written: List[Path] = []
    created_dirs: List[Path] = []
    originals: Dict[Path, bytes] = {}
    staged: List[Tuple[Path, Path]] = []
    try:
        # Stage every file next to its destination before touching any target
        for target, rendered in targets:
            created_dirs.extend(_make_parents(target.parent, root))
            temp_file = target.with_suffix(target.suffix + ".tmp")
            staged.append((temp_file, target))
            temp_file.write_text(rendered.content, encoding="utf-8")

        for temp_file, target in staged:
            if target.exists():
                originals[target] = target.read_bytes()
            temp_file.replace(target)
            written.append(target)
            logger.debug(f"Wrote {target}")
    except OSError as e:
        _rollback(staged, written, originals, created_dirs)
        raise ProjectWriteError(f"Failed to write project to {root}: {e}") from e

    return written


def _make_parents(directory: Path, root: Path) -> List[Path]:
    """Create directory and any missing parents; return the ones created, outermost first."""
    missing = []
    while not directory.exists():
        missing.append(directory)
        if directory == root or directory.parent == directory:
            break
        directory = directory.parent
    missing.reverse()
    for path in missing:
        path.mkdir(parents=True, exist_ok=True)
    return missing


def _rollback(
    staged: List[Tuple[Path, Path]],
    written: List[Path],
    originals: Dict[Path, bytes],
    created_dirs: List[Path],
) -> None:
    """Undo a partial write: restore overwritten files, remove new files and dirs."""
    for temp_file, _ in staged:
        if temp_file.exists():
            temp_file.unlink()
    for target in reversed(written):
        if target in originals:
            target.write_bytes(originals[target])
        elif target.exists():
            target.unlink()
    for directory in reversed(created_dirs):
        if directory.exists() and not any(directory.iterdir()):
            directory.rmdir()
    logger.debug(f"Rolled back {len(written)} written files")
