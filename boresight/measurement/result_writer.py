# boresight/measurement/result_writer.py
"""
Запись угловых выборок и статистики в файл.
"""
import os
import csv
from enum import Enum
from typing import Optional, Sequence, Tuple

from boresight.calibration.calibration_data import CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.measurement.angle_projector import AngleSample
from boresight.measurement.statistics_aggregator import StatisticsResult
from boresight.utils.exceptions import InsufficientDataError, ResultWriterException


class OutputFormat(Enum):
    TXT = "txt"
    MD = "md"
    CSV = "csv"


COLUMNS = ["#", "X (px)", "Y (px)", "Traverse (mrad)", "Elevation (mrad)"]


class ResultWriter:
    """
    Записывает отчёт: заголовок калибровки, строку на каждую точку и итоги.
    """
    def __init__(self, file_path: str, output_format: OutputFormat, decimal_places: int = 4):
        self._file_path = file_path
        self._format = output_format
        self._decimal_places = decimal_places

    def _num(self, value: Optional[float]) -> str:
        if value is None:
            return "-"
        return f"{value:.{self._decimal_places}f}"

    def write(self, session: CalibrationSession,
              rows: Sequence[Tuple[PixelPoint, AngleSample]],
              result: StatisticsResult):
        """
        Записывает отчёт, перезаписывая файл.

        Raises:
            InsufficientDataError: нет ни одной точки.
            ResultWriterException: ошибка ввода-вывода.
        """
        if not rows:
            raise InsufficientDataError("Нет точек для записи")

        try:
            dirname = os.path.dirname(self._file_path)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self._file_path, 'w', encoding='utf-8', newline='') as f:
                if self._format == OutputFormat.CSV:
                    self._write_csv(f, rows, result)
                else:
                    self._write_text(f, session, rows, result)
        except OSError as e:
            raise ResultWriterException(f"Ошибка записи в {self._file_path}: {e}") from e

    def _write_csv(self, f, rows, result: StatisticsResult):
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for i, (point, sample) in enumerate(rows, start=1):
            writer.writerow([i, self._num(point.x), self._num(point.y),
                             self._num(sample.traverse_mrad), self._num(sample.elevation_mrad)])
        writer.writerow([])
        writer.writerow(["Mean", "", "", self._num(result.mean_traverse), self._num(result.mean_elevation)])
        writer.writerow(["StdDev", "", "", self._num(result.std_dev_traverse), self._num(result.std_dev_elevation)])

    def _write_text(self, f, session: CalibrationSession, rows, result: StatisticsResult):
        lines = [
            "# Угловые отклонения точек",
            f"# Дистанция калибровки: {session.real_distance:g}",
            f"# Дальность: {session.range:g}",
            f"# Масштаб: {session.scale:.6g} ед./px",
            f"# Точек: {result.sample_count}",
            "",
        ]
        if self._format == OutputFormat.MD:
            lines.append("| " + " | ".join(COLUMNS) + " |")
            lines.append("|" + "|".join("---" for _ in COLUMNS) + "|")
        else:  # TXT
            lines.append("\t".join(COLUMNS))

        for i, (point, sample) in enumerate(rows, start=1):
            values = [str(i), self._num(point.x), self._num(point.y),
                      self._num(sample.traverse_mrad), self._num(sample.elevation_mrad)]
            if self._format == OutputFormat.MD:
                lines.append("| " + " | ".join(values) + " |")
            else:
                lines.append("\t".join(values))

        lines.append("")
        lines.append(f"Mean (mrad): traverse {self._num(result.mean_traverse)}, "
                     f"elevation {self._num(result.mean_elevation)}")
        lines.append(f"StdDev (mrad): traverse {self._num(result.std_dev_traverse)}, "
                     f"elevation {self._num(result.std_dev_elevation)}")
        f.write('\n'.join(lines) + '\n')
