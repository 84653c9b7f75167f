"""JSON file helpers shared by every component that touches durable state.

Writes are atomic: the payload goes to a temporary file in the target
directory and is moved into place with :func:`os.replace`, so a reader
never sees a half-written article, ledger or failure queue.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, TextIO

from src.utils.errors import StorageError


def _atomic_write(filepath: Path, dump: Callable[[TextIO], None]) -> None:
    tmp_path: Path | None = None
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=filepath.parent,
            prefix=f".{filepath.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            dump(tmp)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, filepath)
    except (OSError, TypeError, ValueError) as exc:
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
        raise StorageError(
            message=f"Could not write {filepath}: {exc}",
            provider_name="filesystem",
        ) from exc


def write_json(data: Any, filepath: Path) -> None:
    """Write *data* as UTF-8 JSON to *filepath*, creating parent directories.

    Raises
    ------
    StorageError
        If the directory cannot be created, the data is not serialisable,
        or the file cannot be written.
    """
    _atomic_write(
        Path(filepath),
        lambda f: json.dump(data, f, ensure_ascii=False, indent=2),
    )


def write_data(data: str, filepath: Path) -> None:
    """Write text *data* to *filepath* atomically, creating parent directories."""
    _atomic_write(Path(filepath), lambda f: f.write(data))


def read_json(filepath: Path, default: Any = None) -> Any:
    """Read JSON from *filepath*, returning *default* if the file is absent.

    A file that exists but cannot be parsed is an error, not an empty
    state: silently starting over would re-download the whole corpus.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        return default
    try:
        return json.loads(filepath.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StorageError(
            message=f"Could not read {filepath}: {exc}",
            provider_name="filesystem",
        ) from exc
