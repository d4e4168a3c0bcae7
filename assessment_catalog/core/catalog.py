"""In-memory property assessment catalog and its shared instance."""

from __future__ import annotations

import threading
from typing import Callable, Iterable, Iterator

from assessment_catalog.common.config_loader import CatalogConfig, load_catalog_config
from assessment_catalog.common.constants import NEIGHBOURHOOD_LIST_LIMIT, VALUE_RANGE_LIST_LIMIT
from assessment_catalog.common.errors import CatalogError
from assessment_catalog.common.geometry import haversine_distance_m
from assessment_catalog.common.http import HttpClient, RetryConfig, TimeoutConfig
from assessment_catalog.common.logging import get_logger, log_event
from assessment_catalog.common.models import PropertyAssessment
from assessment_catalog.core.loader import load_records
from assessment_catalog.core.sources import is_remote, open_source


def _address_sort_key(record: PropertyAssessment) -> tuple[str, str]:
    # House numbers compare as text: "10" sorts before "9".
    return record.house_number, record.street_name


class AssessmentCatalog:
    """Read-only collection of assessments with scan-based queries."""

    def __init__(self, records: Iterable[PropertyAssessment]) -> None:
        self._records: tuple[PropertyAssessment, ...] = tuple(records)

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, source: str | None = None) -> "AssessmentCatalog":
        return cls(load_records(lines, source=source))

    @classmethod
    def from_config(cls, config: CatalogConfig, *, http_client: HttpClient | None = None) -> "AssessmentCatalog":
        location = config.source_location
        if is_remote(location) and http_client is None:
            with HttpClient(
                timeout=TimeoutConfig(connect=config.connect_timeout, read=config.read_timeout),
                retry=RetryConfig(max_attempts=config.max_attempts),
            ) as client:
                return cls.from_config(config, http_client=client)

        log_event(get_logger(), "opening assessment source", event="SOURCE_OPEN", status="ok", source=location)
        with open_source(location, encoding=config.source_encoding, http_client=http_client) as stream:
            return cls.from_lines(stream, source=location)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PropertyAssessment]:
        return iter(self._records)

    @property
    def records(self) -> tuple[PropertyAssessment, ...]:
        return self._records

    # Lookups

    def find_by_account_number(self, account_number: str) -> PropertyAssessment | None:
        return next((r for r in self._records if r.account_number == account_number), None)

    def find_by_address(self, house_number: str, street_name: str) -> PropertyAssessment | None:
        return next(
            (
                r
                for r in self._records
                if r.house_number == house_number
                and r.street_name == street_name
            ),
            None,
        )

    def find_within_radius(self, latitude: float, longitude: float, meters: float) -> list[PropertyAssessment]:
        return [
            r
            for r in self._records
            if haversine_distance_m(latitude, longitude, r.latitude, r.longitude) <= meters
        ]

    # Distinct values

    def distinct_assessment_classes(self) -> list[str]:
        return sorted({r.assessment_class for r in self._records})

    def distinct_wards(self) -> list[str]:
        return sorted({r.ward for r in self._records if r.ward.strip()})

    def distinct_neighbourhoods(self) -> dict[int, str]:
        """Map neighbourhood id to name, ordered by name.

        When one id appears under several names the alphabetically first
        name is kept.
        """
        eligible = [r for r in self._records if r.neighbourhood_id is not None]
        out: dict[int, str] = {}
        for record in sorted(eligible, key=lambda r: r.neighbourhood):
            out.setdefault(record.neighbourhood_id, record.neighbourhood)
        return out

    # Aggregates

    def _by_class(self, assessment_class: str, *, ward: str | None = None) -> Iterator[PropertyAssessment]:
        for record in self._records:
            if record.assessment_class != assessment_class:
                continue
            if ward is not None and record.ward != ward:
                continue
            yield record

    def _values_by_class_and_neighbourhood(self, assessment_class: str, neighbourhood: str) -> list[int]:
        return [
            r.assessed_value
            for r in self._records
            if r.assessment_class == assessment_class and r.neighbourhood == neighbourhood
        ]

    def total_assessed_value(self, assessment_class: str, ward: str | None = None) -> int:
        return sum(r.assessed_value for r in self._by_class(assessment_class, ward=ward))

    def count_by_class(self, assessment_class: str) -> int:
        return sum(1 for _ in self._by_class(assessment_class))

    def count_by_class_and_ward(self, assessment_class: str, ward: str) -> int:
        return sum(1 for _ in self._by_class(assessment_class, ward=ward))

    def min_assessed_value(self, assessment_class: str, neighbourhood: str) -> int:
        return min(self._values_by_class_and_neighbourhood(assessment_class, neighbourhood), default=0)

    def max_assessed_value(self, assessment_class: str, neighbourhood: str) -> int:
        return max(self._values_by_class_and_neighbourhood(assessment_class, neighbourhood), default=0)

    def average_assessed_value(self, assessment_class: str, neighbourhood: str) -> int:
        """Mean value rounded half up, or 0 when nothing matches."""
        values = self._values_by_class_and_neighbourhood(assessment_class, neighbourhood)
        if not values:
            return 0
        total, count = sum(values), len(values)
        return (2 * total + count) // (2 * count)

    # Listings

    def list_by_neighbourhood(self, neighbourhood: str) -> list[PropertyAssessment]:
        matches = [
            r
            for r in self._records
            if r.neighbourhood_id is not None and r.neighbourhood.strip() and r.neighbourhood == neighbourhood
        ]
        # The cap applies to matches in load order, before sorting.
        return sorted(matches[:NEIGHBOURHOOD_LIST_LIMIT], key=_address_sort_key)

    def list_by_neighbourhood_and_value_range(
        self,
        neighbourhood: str,
        min_value: float,
        max_value: float,
    ) -> list[PropertyAssessment]:
        matches = [
            r
            for r in self._records
            if r.neighbourhood_id is not None
            and r.neighbourhood == neighbourhood
            and min_value <= r.assessed_value <= max_value
        ]
        return sorted(matches, key=_address_sort_key)[:VALUE_RANGE_LIST_LIMIT]


CatalogFactory = Callable[[], AssessmentCatalog]

_INSTANCE: AssessmentCatalog | None = None
_INSTANCE_LOCK = threading.Lock()


def _default_factory() -> AssessmentCatalog:
    return AssessmentCatalog.from_config(load_catalog_config())


def get_catalog(factory: CatalogFactory | None = None) -> AssessmentCatalog:
    """Return the process-wide catalog, building it on first use.

    The build runs under a lock so concurrent first callers share a single
    load. A failed build leaves nothing cached and the next call retries.
    """
    global _INSTANCE
    with _INSTANCE_LOCK:
        if _INSTANCE is None:
            build = factory or _default_factory
            try:
                _INSTANCE = build()
            except CatalogError as exc:
                log_event(
                    get_logger(),
                    f"catalog build failed: {exc}",
                    event="LOAD_FAIL",
                    status="error",
                    error_code=exc.error_code,
                )
                raise
        return _INSTANCE


def reset_catalog() -> None:
    global _INSTANCE
    with _INSTANCE_LOCK:
        _INSTANCE = None
