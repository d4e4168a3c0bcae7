from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from assessment_catalog.common.errors import LoadError
from assessment_catalog.core import catalog as catalog_module
from assessment_catalog.core.catalog import AssessmentCatalog, get_catalog, reset_catalog


class CountingFactory:
    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay
        self.lock = threading.Lock()

    def __call__(self) -> AssessmentCatalog:
        with self.lock:
            self.calls += 1
        time.sleep(self.delay)
        return AssessmentCatalog([])


def test_get_catalog_builds_once_and_caches():
    factory = CountingFactory()

    first = get_catalog(factory)
    second = get_catalog(factory)

    assert first is second
    assert factory.calls == 1


def test_concurrent_first_calls_share_one_load():
    factory = CountingFactory(delay=0.05)
    barrier = threading.Barrier(8)
    results: list[AssessmentCatalog] = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        instance = get_catalog(factory)
        with results_lock:
            results.append(instance)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert factory.calls == 1
    assert len(results) == 8
    assert all(instance is results[0] for instance in results)


def test_failed_build_is_not_cached_and_retries():
    attempts = {"count": 0}

    def flaky():
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise LoadError("source unreadable")
        return AssessmentCatalog([])

    with pytest.raises(LoadError):
        get_catalog(flaky)
    assert catalog_module._INSTANCE is None

    instance = get_catalog(flaky)
    assert attempts["count"] == 2
    assert get_catalog(flaky) is instance


def test_reset_catalog_forces_rebuild():
    factory = CountingFactory()

    first = get_catalog(factory)
    reset_catalog()
    second = get_catalog(factory)

    assert first is not second
    assert factory.calls == 2


def test_default_factory_loads_configured_source(monkeypatch, tmp_path: Path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    fixture = Path(__file__).resolve().parents[1] / "fixtures" / "assessments.csv"
    (config_dir / "catalog.yml").write_text(
        f"""source:
  location: {fixture.as_posix()}
http:
  connect_timeout: 5
  read_timeout: 5
  max_attempts: 1
logging:
  level: INFO
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("ASSESSMENT_CATALOG_CONFIG_DIR", str(config_dir))

    instance = get_catalog()

    assert len(instance) == 5
    assert get_catalog() is instance
