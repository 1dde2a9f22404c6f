"""CLI I/O helpers for input reading and atomic output writing."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any, TextIO

STDIN_MARKER = "-"


def read_input_text(source: str, stdin: TextIO) -> str:
    """Read raw code list text from a file path or from stdin when source is ``-``."""

    if source == STDIN_MARKER:
        return stdin.read()

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"Input file not found: {path}") from exc
    except IsADirectoryError as exc:
        raise ValueError(f"Input path is a directory: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ValueError(f"Input file must be UTF-8 text: {path}") from exc


def write_text_atomic(path: Path, content: str) -> None:
    """Write text through a temporary sibling file + replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        tmp.write(content)

    tmp_path.replace(path)


def write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write JSON payload atomically with stable key order."""

    write_text_atomic(path, dump_json(payload))


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2)
