import math
import operator
import random
from functools import reduce

import pytest

from boresight.measurement.angle_projector import AngleSample
from boresight.measurement.statistics_aggregator import AngleMode, StatisticsResult, compute_statistics
from boresight.utils.exceptions import InsufficientDataError


class TestComputeStatistics:
    def test_empty_input_fails(self):
        with pytest.raises(InsufficientDataError):
            compute_statistics([])

    def test_single_sample(self):
        result = compute_statistics([AngleSample(0.001, -0.002)])
        assert result.sample_count == 1
        assert result.mean_traverse == pytest.approx(1.0)
        assert result.mean_elevation == pytest.approx(-2.0)
        assert result.std_dev_traverse == 0.0
        assert result.std_dev_elevation == 0.0

    def test_population_standard_deviation(self):
        # {1, 3} мрад: среднее 2, генеральное СКО 1 (выборочное было бы sqrt(2))
        result = compute_statistics([AngleSample(0.001, 0.0), AngleSample(0.003, 0.0)])
        assert result.mean_traverse == pytest.approx(2.0)
        assert result.std_dev_traverse == pytest.approx(1.0)

    def test_symmetric_elevation(self):
        a = math.atan2(0.2, 10)
        result = compute_statistics([AngleSample(0.0, a), AngleSample(0.0, -a)])
        assert result.mean_elevation == 0.0
        assert result.std_dev_elevation == pytest.approx(a * 1000)
        assert result.std_dev_elevation == pytest.approx(20.0, abs=0.01)

    def test_axes_are_independent(self):
        samples = [AngleSample(0.01, 0.0), AngleSample(0.01, 0.004)]
        result = compute_statistics(samples)
        assert result.std_dev_traverse == 0.0
        assert result.mean_elevation == pytest.approx(2.0)
        assert result.std_dev_elevation == pytest.approx(2.0)

    @pytest.mark.parametrize("n", [9, 17, 40, 60])
    def test_left_to_right_summation_is_exact(self, n):
        rng = random.Random(n)
        values = [rng.uniform(-0.05, 0.05) for _ in range(n)]
        samples = [AngleSample(v, -v) for v in values]
        mean = reduce(operator.add, values) / n
        squares = reduce(operator.add, [(v - mean) * (v - mean) for v in values])
        std = math.sqrt(squares / n)
        result = compute_statistics(samples)
        assert result.mean_traverse == mean * 1000.0
        assert result.std_dev_traverse == std * 1000.0
        assert result.mean_elevation == (reduce(operator.add, [-v for v in values]) / n) * 1000.0

    def test_traverse_only_mode(self):
        result = compute_statistics([AngleSample(0.001, 0.5)], AngleMode.TRAVERSE_ONLY)
        assert result.mean_traverse == pytest.approx(1.0)
        assert result.mean_elevation is None
        assert result.std_dev_elevation is None


class TestFormat:
    def test_four_decimal_places(self):
        result = StatisticsResult(
            mean_traverse=197.39555984988078, std_dev_traverse=0.0,
            mean_elevation=0.0, std_dev_elevation=19.99733375993107, sample_count=1
        )
        text = result.format(4)
        assert "197.3956" in text
        assert "19.9973" in text
        assert "Точек: 1" in text

    def test_custom_decimal_places(self):
        result = StatisticsResult(1.23456, 0.5, None, None, 3)
        text = result.format(2)
        assert "1.23" in text
        assert "0.50" in text
        assert "Вертикаль" not in text

    def test_reproducible(self):
        result = compute_statistics([AngleSample(0.0123, 0.0456), AngleSample(-0.0078, 0.0011)])
        assert result.format() == result.format(4)
