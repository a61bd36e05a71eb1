"""Tests for the dimension planner."""

import pytest

from hexpic.ascii.dimensions import plan_dimensions
from hexpic.ascii.errors import InvalidDimensions


class TestPreserveAspect:
    def test_wide_source_shrinks_height(self):
        # 200x100 source at the default 40-row request keeps the 2:1 ratio
        assert plan_dimensions(40, 40, 200, 100, True) == (40, 20)

    def test_tall_source_shrinks_width(self):
        assert plan_dimensions(80, 40, 100, 200, True) == (20, 40)

    def test_matching_aspect_unchanged(self):
        assert plan_dimensions(80, 40, 800, 400, True) == (80, 40)

    def test_floor_rounding(self):
        # 80 / (640/333) = 41.625 -> 41
        assert plan_dimensions(80, 100, 640, 333, True) == (80, 41)

    def test_extreme_aspect_gives_zero_width(self):
        assert plan_dimensions(80, 40, 1, 1000, True) == (0, 40)

    def test_extreme_aspect_gives_zero_height(self):
        assert plan_dimensions(80, 40, 1000, 1, True) == (80, 0)


class TestIgnoreAspect:
    def test_requested_dimensions_returned(self):
        assert plan_dimensions(50, 30, 100, 100, False) == (50, 30)

    def test_source_ignored_even_if_zero(self):
        assert plan_dimensions(50, 30, 0, 0, False) == (50, 30)


class TestInvalid:
    @pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-5, 10), (10, -1)])
    def test_bad_requested(self, w, h):
        with pytest.raises(InvalidDimensions):
            plan_dimensions(w, h, 100, 100, True)

    @pytest.mark.parametrize("sw,sh", [(0, 100), (100, 0), (-1, 100), (0, 0)])
    def test_bad_source_when_preserving(self, sw, sh):
        with pytest.raises(InvalidDimensions):
            plan_dimensions(80, 40, sw, sh, True)

    def test_nan_source(self):
        with pytest.raises(InvalidDimensions):
            plan_dimensions(80, 40, float("nan"), 100, True)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            plan_dimensions(0, 10, 100, 100, False)
