"""
Общие фикстуры тестов.
"""
import pytest

from boresight.calibration.calibration_service import CalibrationService
from boresight.measurement.measurement_engine import MeasurementEngine
from boresight.utils.logger import DataLogger


@pytest.fixture
def logger(tmp_path):
    """Логгер, пишущий в файл во временной директории."""
    data_logger = DataLogger(str(tmp_path / "logs" / "test.log"))
    yield data_logger
    data_logger.close()


@pytest.fixture
def service(logger):
    return CalibrationService(logger)


@pytest.fixture
def engine(logger):
    return MeasurementEngine(logger)


@pytest.fixture
def calibrated_engine(engine):
    """Калибровка: точки (0,0) и (100,0), дистанция 2, дальность 10 -> масштаб 0.02."""
    engine.load_image_known()
    engine.set_calibration(2, 10)
    engine.click_at(0, 0)
    engine.click_at(100, 0)
    return engine
