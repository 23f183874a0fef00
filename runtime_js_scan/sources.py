"""Loading script sources from disk.

Pages are materialised into script files by an external collector; this
module turns those files into ``ScriptSource`` values. Files that cannot be
read are logged and skipped so one bad file never stops a scan.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .constants import MAX_SCRIPT_FILE_SIZE, SCRIPT_EXTENSIONS
from .core.exceptions import ScriptLoadError
from .models import ScriptSource

logger = logging.getLogger(__name__)


def load_script_source(path: Path, identifier: str | None = None) -> ScriptSource:
    """Read one script file.

    Args:
        path: File to read.
        identifier: Identifier to report for the script. Defaults to the
            file path.

    Raises:
        ScriptLoadError: If the file is missing or too large.

    Bytes that are not valid UTF-8 are decoded as U+FFFD so a stray
    Latin-1 or binary byte never drops the whole script.
    """
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ScriptLoadError(f"Cannot access {path}: {e}") from e

    if size > MAX_SCRIPT_FILE_SIZE:
        raise ScriptLoadError(
            f"{path} is {size} bytes, larger than the {MAX_SCRIPT_FILE_SIZE} byte limit"
        )

    try:
        source_text = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise ScriptLoadError(f"Cannot read {path}: {e}") from e

    return ScriptSource(identifier=identifier or str(path), source_text=source_text)


def discover_script_files(paths: Iterable[Path]) -> list[Path]:
    """Expand *paths* into script files, walking directories recursively.

    Files named explicitly are kept whatever their extension; files found
    inside directories must have a script extension. Order is stable:
    arguments in the order given, directory contents sorted.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(
                    p for p in path.rglob("*")
                    if p.is_file() and p.suffix in SCRIPT_EXTENSIONS
                )
            )
        else:
            files.append(path)
    return files


def load_script_sources(paths: Iterable[Path]) -> list[ScriptSource]:
    """Load every script under *paths*, skipping unreadable files."""
    scripts: list[ScriptSource] = []
    for path in discover_script_files(paths):
        try:
            scripts.append(load_script_source(path))
        except ScriptLoadError as e:
            logger.warning(f"Skipping script: {e}")
    logger.info(f"Loaded {len(scripts)} script(s)")
    return scripts
