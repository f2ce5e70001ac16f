import pytest

from boresight.calibration.calibration_point import PixelPoint
from boresight.measurement.point_collector import PointCollector
from boresight.utils.exceptions import NotCalibratedError


@pytest.fixture
def collector(service, logger):
    return PointCollector(service, logger)


def _calibrate(service):
    service.image_loaded()
    service.begin_calibration(2, 10)
    service.submit_reference_point(PixelPoint(0, 0))
    service.submit_reference_point(PixelPoint(100, 0))


class TestPointCollector:
    def test_rejected_without_image(self, collector):
        with pytest.raises(NotCalibratedError):
            collector.submit_marked_point(PixelPoint(1, 1))
        assert collector.get_point_count() == 0

    def test_rejected_while_calibrating(self, service, collector):
        service.image_loaded()
        service.begin_calibration(2, 10)
        service.submit_reference_point(PixelPoint(0, 0))
        with pytest.raises(NotCalibratedError):
            collector.submit_marked_point(PixelPoint(1, 1))
        assert service.current_session.marked_points == []

    def test_points_appended_in_order(self, service, collector):
        _calibrate(service)
        points = [PixelPoint(i, -i) for i in range(5)]
        counts = [collector.submit_marked_point(p) for p in points]
        assert counts == [1, 2, 3, 4, 5]
        assert collector.get_marked_points() == points
        assert service.current_session.marked_points == points

    def test_get_marked_points_returns_copy(self, service, collector):
        _calibrate(service)
        collector.submit_marked_point(PixelPoint(1, 1))
        copy = collector.get_marked_points()
        copy.clear()
        assert collector.get_point_count() == 1

    def test_no_upper_bound(self, service, collector):
        _calibrate(service)
        for i in range(1000):
            collector.submit_marked_point(PixelPoint(i, i))
        assert collector.get_point_count() == 1000

    def test_points_cleared_by_recalibration(self, service, collector):
        _calibrate(service)
        collector.submit_marked_point(PixelPoint(1, 1))
        service.begin_calibration(2, 10)
        assert collector.get_point_count() == 0
        assert collector.get_marked_points() == []

    def test_on_point_added(self, service, collector):
        _calibrate(service)
        added = []
        collector.on_point_added = lambda p, n: added.append((p, n))
        collector.submit_marked_point(PixelPoint(3, 4))
        assert added == [(PixelPoint(3, 4), 1)]
