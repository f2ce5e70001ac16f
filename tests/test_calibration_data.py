import dataclasses
import math

import pytest

from boresight.calibration.calibration_data import CalibrationInput, CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.utils.exceptions import (
    InvalidCalibrationInputError, NotCalibratedError, PreconditionError
)


class TestPixelPoint:
    def test_coordinates_are_floats(self):
        p = PixelPoint(3, 4)
        assert isinstance(p.x, float) and isinstance(p.y, float)
        assert (p.x, p.y) == (3.0, 4.0)

    def test_is_immutable(self):
        p = PixelPoint(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 5

    @pytest.mark.parametrize("x, y", [(math.inf, 0), (0, math.nan), (-math.inf, 1)])
    def test_rejects_non_finite(self, x, y):
        with pytest.raises(ValueError):
            PixelPoint(x, y)

    def test_equal_points_compare_equal(self):
        assert PixelPoint(1, 2) == PixelPoint(1.0, 2.0)


class TestCalibrationInput:
    def test_valid_numbers(self):
        ci = CalibrationInput.from_values(2, 10)
        assert ci.real_distance == 2.0
        assert ci.range == 10.0

    def test_numeric_strings_from_text_fields(self):
        ci = CalibrationInput.from_values(" 2.5 ", "100")
        assert ci.real_distance == 2.5
        assert ci.range == 100.0

    def test_decimal_comma(self):
        assert CalibrationInput.from_values("0,5", "10").real_distance == 0.5

    @pytest.mark.parametrize("real_distance, range_", [
        (0, 10),
        (2, 0),
        (-1, 10),
        (2, -10),
        (None, 10),
        (2, None),
        ("", 10),
        ("abc", 10),
        (True, 10),
        (math.nan, 10),
        (2, math.inf),
    ])
    def test_invalid_values_rejected(self, real_distance, range_):
        with pytest.raises(InvalidCalibrationInputError):
            CalibrationInput.from_values(real_distance, range_)

    def test_invalid_input_is_precondition_error(self):
        with pytest.raises(PreconditionError):
            CalibrationInput.from_values(0, 10)


class TestCalibrationSession:
    def _session(self):
        return CalibrationSession(calibration_input=CalibrationInput.from_values(2, 10), generation=1)

    def test_new_session_is_incomplete(self):
        session = self._session()
        assert not session.is_complete
        assert session.reference_points == []
        assert session.marked_points == []
        assert session.range == 10.0
        assert session.real_distance == 2.0

    def test_midpoint_requires_complete_session(self):
        session = self._session()
        session.reference_points.append(PixelPoint(0, 0))
        with pytest.raises(NotCalibratedError):
            session.reference_midpoint()

    def test_midpoint_of_complete_session(self):
        session = self._session()
        session.reference_points.extend([PixelPoint(0, 0), PixelPoint(100, 20)])
        session.scale = 0.02
        assert session.is_complete
        assert session.reference_midpoint() == (50.0, 10.0)

    def test_marked_points(self):
        session = self._session()
        session.add_marked_point(PixelPoint(1, 1))
        session.add_marked_point(PixelPoint(2, 2))
        assert session.get_marked_point_count() == 2
        assert session.marked_points[0] == PixelPoint(1, 1)
