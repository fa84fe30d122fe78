# src/jsxbuild/pipeline/documents.py
# Reading the host document, the one-time backup, atomic writes and restore.

import logging
import os
import shutil
import tempfile
from pathlib import Path

from jsxbuild.cli.controller import canvas
from jsxbuild.errors import DocumentWriteError, HostDocumentMissing, HostDocumentUnreadable, NoBackupFound
from jsxbuild.pipeline.models import HostDocument

logger = logging.getLogger(__name__)


def read_document(path: Path) -> HostDocument:
    # newline="" keeps CRLF line endings intact
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return HostDocument(path=Path(path), text=f.read())
    except FileNotFoundError:
        raise HostDocumentMissing(f"{path} not found!") from None
    except UnicodeDecodeError as e:
        raise HostDocumentUnreadable(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise HostDocumentUnreadable(f"Could not read {path}: {e}") from e


def ensure_backup(input_path: Path, backup_path: Path) -> bool:
    """Copy the on-disk original to ``backup_path`` unless a backup exists.

    The backup is never overwritten. Returns True when it was created now.
    """
    if backup_path.exists():
        logger.debug("Backup %s already present, leaving it untouched", backup_path)
        return False
    if not input_path.exists():
        raise HostDocumentMissing(f"{input_path} not found!")
    try:
        shutil.copyfile(input_path, backup_path)
    except OSError as e:
        raise DocumentWriteError(f"Could not back up {input_path} to {backup_path}: {e}") from e
    canvas.success(f"Backed up original to {backup_path}")
    return True


def read_source(input_path: Path, backup_path: Path) -> HostDocument:
    """Read the pristine original: the backup when present, else the input."""
    if backup_path.exists():
        logger.debug("Reading source from backup %s", backup_path)
        return read_document(backup_path)
    return read_document(input_path)


def _replace_via_temp(path: Path, fill, mode_source: Path):
    """Fill a sibling temp file, give it ``mode_source``'s mode, rename it over ``path``."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        fill(fd, tmp_name)
        if mode_source.exists():
            shutil.copymode(mode_source, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def write_atomic(path: Path, text: str):
    """Write ``text`` to a sibling temp file and rename it over ``path``."""
    path = Path(path)

    def fill(fd, tmp_name):
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)

    try:
        _replace_via_temp(path, fill, mode_source=path)
    except OSError as e:
        raise DocumentWriteError(f"Could not write {path}: {e}") from e
    logger.debug("Wrote %d characters to %s", len(text), path)


def restore_backup(input_path: Path, backup_path: Path):
    """Copy the backup verbatim back over ``input_path``, keeping the page's mode."""
    input_path = Path(input_path)
    if not backup_path.exists():
        raise NoBackupFound(f"No backup found ({backup_path})")

    def fill(fd, tmp_name):
        os.close(fd)
        shutil.copyfile(backup_path, tmp_name)

    mode_source = input_path if input_path.exists() else backup_path
    try:
        _replace_via_temp(input_path, fill, mode_source=mode_source)
    except OSError as e:
        raise DocumentWriteError(f"Could not restore {input_path} from {backup_path}: {e}") from e
