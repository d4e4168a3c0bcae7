from __future__ import annotations

import pytest

from assessment_catalog.core.catalog import reset_catalog


@pytest.fixture(autouse=True)
def _fresh_catalog():
    reset_catalog()
    yield
    reset_catalog()
