import json
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def raw_dump():
    return (FIXTURES / "config_dump.json").read_text()


@pytest.fixture
def dump(raw_dump):
    return json.loads(raw_dump)


@pytest.fixture
def sections_by_type(dump):
    """The fixture's config sections keyed by the short @type name."""
    return {entry["@type"].rsplit(".", 1)[-1]: entry for entry in dump["configs"]}


def block(report, title):
    """Return the lines of the report block starting with ``title``, or None."""
    for chunk in report.split("\n\n"):
        lines = chunk.splitlines()
        if lines and lines[0] == title:
            return lines
    return None


def titles(report):
    return [chunk.splitlines()[0] for chunk in report.split("\n\n") if chunk]
