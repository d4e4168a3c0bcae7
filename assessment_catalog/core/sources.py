"""Open assessment exports from local paths or HTTP(S) URLs."""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO
from urllib.parse import urlparse

from assessment_catalog.common.errors import SourceError
from assessment_catalog.common.fs import open_text
from assessment_catalog.common.http import HttpClient

REMOTE_SCHEMES = {"http", "https"}


def is_remote(location: str) -> bool:
    return urlparse(location).scheme.lower() in REMOTE_SCHEMES


def open_source(
    location: str,
    *,
    encoding: str = "utf-8",
    http_client: HttpClient | None = None,
) -> IO[str]:
    if is_remote(location):
        if http_client is None:
            with HttpClient() as client:
                text = client.get_text(location, encoding=encoding)
        else:
            text = http_client.get_text(location, encoding=encoding)
        return io.StringIO(text, newline="")

    path = Path(location)
    try:
        return open_text(path, encoding=encoding)
    except OSError as exc:
        raise SourceError(f"Cannot open assessment source {path}: {exc}") from exc
