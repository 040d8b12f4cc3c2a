"""Dev-data loader: the bundled JSON file must pass the create rules."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

from app.schemas.tour import TourCreate

SCRIPT = Path(__file__).parent.parent / "scripts" / "import_dev_data.py"


@pytest.fixture(scope="module")
def loader():
    spec = importlib.util.spec_from_file_location("import_dev_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_bundled_tours_are_valid(loader):
    tours = loader.load_tours()
    assert len(tours) == 6
    assert all(isinstance(t, TourCreate) for t in tours)
    assert len({t.name for t in tours}) == 6


def test_start_dates_parsed_as_datetimes(loader):
    hiker = next(t for t in loader.load_tours() if t.name == "The Forest Hiker")
    assert [d.month for d in hiker.start_dates] == [4, 7, 10]


def test_invalid_file_rejected(loader, tmp_path):
    bad = tmp_path / "tours.json"
    bad.write_text('[{"name": "Too short", "price": 10}]', encoding="utf-8")
    with pytest.raises(ValueError):
        loader.load_tours(bad)
