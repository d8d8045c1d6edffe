import pytest

from regression_playground.exceptions import RegressionPlaygroundError, UnknownPreset
from regression_playground.models import Point
from regression_playground.presets import INITIAL_POINTS, PresetCatalog
from regression_playground.store import PointStore


def test_reference_presets_have_five_points_each():
    catalog = PresetCatalog()
    assert catalog.names() == ("linear", "scattered", "noCorrelation")
    for name in catalog.names():
        preset = catalog.get(name)
        assert preset.name == name
        assert len(preset.points) == 5


def test_linear_preset_values():
    preset = PresetCatalog().get("linear")
    assert preset.label == "Perfect Linear"
    assert preset.points[0] == Point(1.0, 2.0)
    assert preset.points[-1] == Point(9.0, 10.0)


def test_unknown_preset_raises():
    catalog = PresetCatalog()
    with pytest.raises(UnknownPreset) as exc_info:
        catalog.get("quadratic")
    assert exc_info.value.name == "quadratic"
    assert "quadratic" in str(exc_info.value)
    assert isinstance(exc_info.value, KeyError)
    assert isinstance(exc_info.value, RegressionPlaygroundError)
    assert "quadratic" not in catalog
    assert "linear" in catalog


def test_loading_presets_fully_replaces_store_contents():
    catalog = PresetCatalog()
    store = PointStore(INITIAL_POINTS)
    store.add(Point(14.0, 14.0))

    store.replace_all(catalog.get("linear").points)
    assert store.snapshot() == catalog.get("linear").points

    store.replace_all(catalog.get("scattered").points)
    assert store.snapshot() == catalog.get("scattered").points
    assert Point(14.0, 14.0) not in store.snapshot()


def test_store_edits_do_not_touch_preset_data():
    catalog = PresetCatalog()
    store = PointStore()
    store.replace_all(catalog.get("linear").points)
    store.update(0, 0.0, 0.0)
    store.remove(1)
    assert catalog.get("linear").points[0] == Point(1.0, 2.0)
    assert len(catalog.get("linear").points) == 5


def test_initial_points():
    assert INITIAL_POINTS == (Point(2.0, 3.0), Point(4.0, 5.0), Point(6.0, 7.0), Point(8.0, 9.0))
