from __future__ import annotations

from pathlib import Path

import pytest

from assessment_catalog.common.errors import SourceError
from assessment_catalog.core.sources import is_remote, open_source


class FakeHttpClient:
    def __init__(self, text: str) -> None:
        self.text = text
        self.urls: list[str] = []

    def get_text(self, url: str, *, encoding: str | None = None) -> str:
        self.urls.append(url)
        return self.text


def test_is_remote_detects_http_schemes():
    assert is_remote("https://data.example.org/assessments.csv")
    assert is_remote("HTTP://data.example.org/assessments.csv")
    assert not is_remote("data/assessments.csv")
    assert not is_remote("/tmp/assessments.csv")


def test_open_source_reads_local_file(tmp_path: Path):
    path = tmp_path / "a.csv"
    path.write_text("h\nrow\n", encoding="utf-8")

    with open_source(str(path)) as stream:
        assert stream.read() == "h\nrow\n"


def test_open_source_missing_file_raises_source_error(tmp_path: Path):
    with pytest.raises(SourceError):
        open_source(str(tmp_path / "missing.csv"))


def test_open_source_fetches_urls_through_http_client():
    client = FakeHttpClient("h\nrow\n")

    with open_source("https://example.test/a.csv", http_client=client) as stream:
        assert stream.readlines() == ["h\n", "row\n"]
    assert client.urls == ["https://example.test/a.csv"]
