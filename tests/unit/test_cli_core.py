import argparse

import pytest

from assessment_catalog.cli import execute_query, parse_args
from assessment_catalog.common.models import PropertyAssessment
from assessment_catalog.core.catalog import AssessmentCatalog


def _catalog() -> AssessmentCatalog:
    def record(account: str, value: int, house: str) -> PropertyAssessment:
        return PropertyAssessment(
            account_number=account,
            suite=None,
            house_number=house,
            street_name="MAIN STREET",
            has_garage=False,
            neighbourhood_id=7,
            neighbourhood="GARNEAU",
            ward="Ward A",
            assessed_value=value,
            latitude=53.5,
            longitude=-113.5,
            assessment_class="RESIDENTIAL",
        )

    return AssessmentCatalog([record("1", 100000, "2"), record("2", 200000, "1")])


def test_parse_args_defaults():
    args = parse_args(["classes"])
    assert args.command == "classes"
    assert args.config_dir is None
    assert args.overlay_config_dir is None
    assert args.source is None


def test_parse_args_global_options_and_typed_positionals():
    args = parse_args(["--source", "https://example.test/a.csv", "radius", "53.5", "-113.5", "250"])
    assert args.source == "https://example.test/a.csv"
    assert (args.latitude, args.longitude, args.meters) == (53.5, -113.5, 250.0)


def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        parse_args([])


def test_execute_query_stats_and_counts():
    catalog = _catalog()

    assert execute_query(catalog, parse_args(["stats", "RESIDENTIAL", "GARNEAU"])) == {
        "min": 100000,
        "max": 200000,
        "average": 150000,
    }
    assert execute_query(catalog, parse_args(["count", "RESIDENTIAL"])) == 2
    assert execute_query(catalog, parse_args(["count", "RESIDENTIAL", "--ward", "Ward B"])) == 0
    assert execute_query(catalog, parse_args(["total", "RESIDENTIAL", "--ward", "Ward A"])) == 300000


def test_execute_query_lookups_and_listings():
    catalog = _catalog()

    assert execute_query(catalog, parse_args(["account", "2"]))["assessed_value"] == 200000
    assert execute_query(catalog, parse_args(["account", "404"])) is None
    assert execute_query(catalog, parse_args(["neighbourhoods"])) == {"7": "GARNEAU"}
    listed = execute_query(catalog, parse_args(["list", "GARNEAU"]))
    assert [row["house_number"] for row in listed] == ["1", "2"]
    ranged = execute_query(catalog, parse_args(["list", "GARNEAU", "--min", "150000"]))
    assert [row["account_number"] for row in ranged] == ["2"]


def test_execute_query_rejects_unknown_command():
    with pytest.raises(ValueError):
        execute_query(_catalog(), argparse.Namespace(command="drop"))
