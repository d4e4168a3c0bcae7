"""Filesystem helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def open_text(path: Path, encoding: str = "utf-8") -> IO[str]:
    return path.open("r", encoding=encoding, newline="")


def dump_json(payload, stream: IO[str]) -> None:
    json.dump(payload, stream, ensure_ascii=False, indent=2)
    stream.write("\n")
