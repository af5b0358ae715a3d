"""Render resolved values as `name = value` lines."""

import os
import stat
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path


def format_values(values: Mapping[str, int] | Iterable[tuple[str, int]]) -> str:
    """One `name = value` line per variable, sorted by name."""
    items = values.items() if hasattr(values, "items") else values
    return "".join(f"{name} = {value}\n" for name, value in sorted(items))


def _file_mode(filepath: Path) -> int:
    """Mode for the result file: the existing file's, else what umask allows."""
    if filepath.exists():
        return stat.S_IMODE(filepath.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(filepath: str | Path, values) -> None:
    """Write values to `filepath`, replacing it only once fully written."""
    filepath = Path(filepath)
    content = format_values(values)

    fd, tmp_name = tempfile.mkstemp(
        dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        # mkstemp creates the file as 0600
        os.fchmod(fd, _file_mode(filepath))
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        tmp_path.replace(filepath)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
