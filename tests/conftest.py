"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from evalfilter.catalog import FieldCatalog


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_fields():
    """Field catalog entries for an experiment list."""
    return [
        {"name": "name", "title": "Name", "type": "string", "field_type": 0},
        {
            "name": "status",
            "title": "Status",
            "type": "options",
            "field_type": "expt_status",
            "setter_props": {"option_list": [{"label": "Success", "value": "11"}]},
        },
        {"name": "score", "title": "Score", "type": "number", "field_type": 1, "field_key": "ev_42"},
        {
            "name": "score_no_eq",
            "title": "Score (ranges only)",
            "type": "number",
            "field_type": 1,
            "field_key": "ev_43",
            "disabled_operations": ["equals", "not-equals"],
        },
        {"name": "start_time", "title": "Start time", "type": "date", "field_type": 0},
        {"name": "creator", "title": "Creator", "type": "user_ref", "field_type": "creator_by"},
        {"name": "eval_set", "title": "Evaluation set", "type": "options", "field_type": 6},
        {"name": "target", "title": "Target", "type": "composite", "field_type": "source_target"},
    ]


@pytest.fixture
def catalog(sample_fields):
    """A FieldCatalog built from sample_fields."""
    return FieldCatalog(sample_fields)


@pytest.fixture
def sample_filter_fields():
    """Simple filter whitelist."""
    return [
        {"key": "status", "type": 3},
        {"key": "expt_type", "type": 30},
    ]


@pytest.fixture
def sample_catalog_path(temp_dir, sample_fields, sample_filter_fields):
    """Write a catalog configuration YAML file."""
    import yaml

    path = temp_dir / "catalog.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(
            {
                "name": "experiments",
                "fields": sample_fields,
                "filter_fields": sample_filter_fields,
                "disabled_fields": ["eval_set"],
            },
            f,
        )
    return path


@pytest.fixture
def sample_logic_filter_path(temp_dir):
    """Write a logic filter JSON file with one incomplete expression."""
    path = temp_dir / "filter.json"
    path.write_text(
        json.dumps(
            {
                "logic_operator": "and",
                "exprs": [
                    {"left": "status", "operator": "contains", "right": ["11", "12"]},
                    {"left": "score", "operator": "greater-than", "right": None},
                ],
            }
        )
    )
    return path
