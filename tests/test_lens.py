"""
Tests for the functional field accessors
"""

import pytest
from collections import OrderedDict, defaultdict, namedtuple
from collections.abc import Mapping
from dataclasses import dataclass

from mhgibbs.core.lens import Lens, make_lens


# --------------------------------------------------
# Fixtures
# --------------------------------------------------
@dataclass(frozen=True)
class Point:
    x: float
    y: float


PointTuple = namedtuple("PointTuple", ["x", "y"])


class PlainPoint:
    def __init__(self, x, y):
        self.x = x
        self.y = y


# --------------------------------------------------
# make_lens
# --------------------------------------------------
@pytest.mark.parametrize("model", [Point(1.0, 2.0), PointTuple(1.0, 2.0), {"x": 1.0, "y": 2.0}, PlainPoint(1.0, 2.0)])
def test_make_lens_get_set(model):
    """Setting a field returns a new model and leaves the original untouched"""
    lens = make_lens("x")

    assert lens.get(model) == 1.0
    updated = lens.set(model, 5.0)

    assert lens.get(updated) == 5.0
    assert lens.get(model) == 1.0
    assert updated is not model
    assert make_lens("y").get(updated) == 2.0


class FrozenMap(Mapping):
    """Read-only mapping built from a dict"""

    def __init__(self, items):
        self._items = dict(items)

    def __getitem__(self, key):
        return self._items[key]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)


@pytest.mark.parametrize(
    "model",
    [OrderedDict([("x", 1.0), ("y", 2.0)]), defaultdict(float, {"x": 1.0, "y": 2.0}), FrozenMap({"x": 1.0, "y": 2.0})],
)
def test_make_lens_keeps_mapping_type(model):
    updated = make_lens("x").set(model, 5.0)

    assert type(updated) is type(model)
    assert updated["x"] == 5.0
    assert model["x"] == 1.0
    assert list(updated) == ["x", "y"]


def test_make_lens_defaultdict_keeps_factory():
    updated = make_lens("x").set(defaultdict(list, {"x": [1]}), [2])
    assert updated["missing"] == []


class ScaledView(Mapping):
    """Read-only view whose constructor does not accept a plain dict"""

    def __init__(self, items, factor):
        self._items = {k: v * factor for k, v in items.items()}

    def __getitem__(self, key):
        return self._items[key]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)


def test_make_lens_unbuildable_mapping_becomes_dict():
    updated = make_lens("x").set(ScaledView({"x": 1.0, "y": 2.0}, 2.0), 5.0)
    assert updated == {"x": 5.0, "y": 4.0}
    assert type(updated) is dict


def test_make_lens_set_then_get():
    lens = make_lens("y")
    model = Point(0.0, 0.0)
    for value in (-3.5, 0.0, 1e10):
        assert lens.get(lens.set(model, value)) == value


def test_make_lens_missing_field():
    with pytest.raises(AttributeError):
        make_lens("z").get(Point(1.0, 2.0))
    with pytest.raises(KeyError):
        make_lens("z").get({"x": 1.0})


def test_make_lens_name():
    assert make_lens("x").name == "x"
    assert "x" in repr(make_lens("x"))


# --------------------------------------------------
# Lens
# --------------------------------------------------
def test_custom_lens():
    """A lens can target a derived location such as an element of a tuple"""
    lens = Lens(lambda m: m[1], lambda m, v: (m[0], v, m[2]), name="middle")
    model = (1, 2, 3)

    assert lens.get(model) == 2
    assert lens.set(model, 7) == (1, 7, 3)
    assert model == (1, 2, 3)
