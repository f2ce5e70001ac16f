import math

import pytest

from boresight.calibration.calibration_data import CalibrationInput, CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.measurement.angle_projector import AngleSample, project_point, project_points
from boresight.utils.exceptions import NotCalibratedError


@pytest.fixture
def session():
    """Точки (0,0) и (100,0), дистанция 2, дальность 10."""
    s = CalibrationSession(calibration_input=CalibrationInput.from_values(2, 10), generation=1)
    s.reference_points.extend([PixelPoint(0, 0), PixelPoint(100, 0)])
    s.scale = 2 / 100
    return s


class TestProjectPoint:
    def test_point_right_of_boresight(self, session):
        sample = project_point(session, PixelPoint(150, 0))
        assert sample.traverse == pytest.approx(math.atan2(2, 10))
        assert sample.traverse_mrad == pytest.approx(197.3956, abs=1e-4)
        assert sample.elevation == 0.0

    def test_midpoint_gives_exact_zero(self, session):
        sample = project_point(session, PixelPoint(50, 0))
        assert sample.traverse == 0.0
        assert sample.elevation == 0.0

    def test_midpoint_of_oblique_reference(self):
        s = CalibrationSession(calibration_input=CalibrationInput.from_values(3, 250), generation=1)
        s.reference_points.extend([PixelPoint(13, 7), PixelPoint(41, 29)])
        s.scale = 0.1
        sample = project_point(s, PixelPoint(27, 18))
        assert sample == AngleSample(traverse=0.0, elevation=0.0)

    def test_sign_follows_displacement(self, session):
        left_up = project_point(session, PixelPoint(0, -10))
        right_down = project_point(session, PixelPoint(100, 10))
        assert left_up.traverse < 0 and left_up.elevation < 0
        assert right_down.traverse > 0 and right_down.elevation > 0
        assert left_up.traverse == -right_down.traverse
        assert left_up.elevation == -right_down.elevation

    def test_vertical_offset(self, session):
        sample = project_point(session, PixelPoint(50, 10))
        assert sample.traverse == 0.0
        assert sample.elevation == pytest.approx(math.atan2(0.2, 10))

    def test_incomplete_session_rejected(self):
        s = CalibrationSession(calibration_input=CalibrationInput.from_values(2, 10), generation=1)
        s.reference_points.append(PixelPoint(0, 0))
        with pytest.raises(NotCalibratedError):
            project_point(s, PixelPoint(1, 1))


class TestProjectPoints:
    def test_preserves_order(self, session):
        points = [PixelPoint(150, 0), PixelPoint(50, 0), PixelPoint(-50, 0)]
        samples = project_points(session, points)
        assert [s.traverse for s in samples] == pytest.approx(
            [math.atan2(2, 10), 0.0, math.atan2(-2, 10)]
        )

    def test_empty(self, session):
        assert project_points(session, []) == []
