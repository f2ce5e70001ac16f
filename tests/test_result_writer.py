import pytest

from boresight.calibration.calibration_data import CalibrationInput, CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.measurement.angle_projector import project_point
from boresight.measurement.result_writer import OutputFormat, ResultWriter
from boresight.measurement.statistics_aggregator import AngleMode, compute_statistics
from boresight.utils.exceptions import InsufficientDataError


@pytest.fixture
def session():
    s = CalibrationSession(calibration_input=CalibrationInput.from_values(2, 10), generation=1)
    s.reference_points.extend([PixelPoint(0, 0), PixelPoint(100, 0)])
    s.scale = 0.02
    s.marked_points.extend([PixelPoint(150, 0), PixelPoint(50, 10)])
    return s


@pytest.fixture
def rows(session):
    return [(p, project_point(session, p)) for p in session.marked_points]


class TestResultWriter:
    def test_markdown_table(self, tmp_path, session, rows):
        result = compute_statistics([s for _, s in rows])
        path = tmp_path / "report.md"
        ResultWriter(str(path), OutputFormat.MD).write(session, rows, result)
        text = path.read_text(encoding="utf-8")
        assert "| # | X (px) | Y (px) | Traverse (mrad) | Elevation (mrad) |" in text
        assert "| 1 | 150.0000 | 0.0000 | 197.3956 | 0.0000 |" in text
        assert "# Дальность: 10" in text
        assert "Mean (mrad)" in text

    def test_text_report(self, tmp_path, session, rows):
        result = compute_statistics([s for _, s in rows])
        path = tmp_path / "nested" / "report.txt"
        ResultWriter(str(path), OutputFormat.TXT, decimal_places=2).write(session, rows, result)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert "1\t150.00\t0.00\t197.40\t0.00" in lines
        assert lines[-1].startswith("StdDev (mrad)")

    def test_traverse_only_summary(self, tmp_path, session, rows):
        result = compute_statistics([s for _, s in rows], AngleMode.TRAVERSE_ONLY)
        path = tmp_path / "report.txt"
        ResultWriter(str(path), OutputFormat.TXT).write(session, rows, result)
        assert "elevation -" in path.read_text(encoding="utf-8")

    def test_empty_rows_rejected(self, tmp_path, session, rows):
        result = compute_statistics([s for _, s in rows])
        with pytest.raises(InsufficientDataError):
            ResultWriter(str(tmp_path / "r.csv"), OutputFormat.CSV).write(session, [], result)
