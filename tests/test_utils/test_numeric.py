"""
Tests for climate_ranker/utils/numeric.py and utils/logging.py.

What we test
------------
  - mean() of empty input is None.
  - pct_change() is None for a zero baseline.
  - inverted_min_max() returns the full scale for a zero range and clamps.
  - inverted_min_max() and clamp() reject non-finite input instead of
    mapping it to the top of the scale.
  - linear_scale() clamps to [0, scale].
  - sums_to_one() honours the tolerance.
  - round_display() rounds to one decimal.
  - configure_logging() installs stdout and optional file handlers and
    writes JSON lines with `extra=` fields when json_format is set.
"""

from __future__ import annotations

import json
import logging
import math

import pytest

from climate_ranker.config import LoggingConfig
from climate_ranker.utils.logging import _JsonFormatter, configure_logging
from climate_ranker.utils.numeric import (
    clamp,
    inverted_min_max,
    linear_scale,
    mean,
    pct_change,
    round_display,
    sums_to_one,
)


class TestNumeric:
    def test_mean(self):
        assert mean([]) is None
        assert mean([1.0, 2.0, 3.0]) == pytest.approx(2.0)

    def test_pct_change(self):
        assert pct_change(0.0, 5.0) is None
        assert pct_change(200.0, 150.0) == pytest.approx(-25.0)

    def test_inverted_min_max(self):
        assert inverted_min_max(5.0, 5.0, 5.0) == 10.0
        assert inverted_min_max(0.0, 0.0, 10.0) == 10.0
        assert inverted_min_max(10.0, 0.0, 10.0) == 0.0
        assert inverted_min_max(20.0, 0.0, 10.0) == 0.0

    @pytest.mark.parametrize("args", [
        (math.inf, 100.0, math.inf),
        (100.0, 100.0, math.inf),
        (math.nan, 0.0, 10.0),
    ])
    def test_inverted_min_max_rejects_non_finite(self, args):
        with pytest.raises(ValueError):
            inverted_min_max(*args)

    def test_clamp_rejects_nan(self):
        with pytest.raises(ValueError):
            clamp(math.nan, 0.0, 10.0)

    def test_mean_of_large_values_is_finite(self):
        assert mean([1e308, 1e308, 1e308]) == pytest.approx(1e308)

    def test_linear_scale(self):
        assert linear_scale(2.0, 1.0, 3.0) == pytest.approx(5.0)
        assert linear_scale(0.0, 1.0, 3.0) == 0.0
        assert linear_scale(4.0, 1.0, 3.0) == 10.0

    def test_sums_to_one(self):
        assert sums_to_one([0.3, 0.4, 0.3])
        assert sums_to_one([0.5, 0.5000001])
        assert not sums_to_one([0.3, 0.3, 0.3])

    def test_round_display(self):
        assert round_display(6.66666) == 6.7


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "ranker.log"
        configure_logging(LoggingConfig(level="DEBUG", log_file=str(log_file)))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        assert log_file.parent.exists()

    def test_json_formatter(self):
        record = logging.LogRecord(
            "climate_ranker.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None,
        )
        record.entity_id = "GridCo"
        payload = json.loads(_JsonFormatter().format(record))
        assert payload["msg"] == "hello world"
        assert payload["level"] == "WARNING"
        assert payload["entity_id"] == "GridCo"

    def test_json_lines_written_to_file(self, tmp_path):
        log_file = tmp_path / "ranker.log"
        configure_logging(LoggingConfig(log_file=str(log_file), json_format=True))
        logging.getLogger("climate_ranker.test").warning(
            "gap for %s", "SodaCo", extra={"entity_id": "SodaCo"},
        )
        for handler in logging.getLogger().handlers:
            handler.flush()
        payload = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert payload["msg"] == "gap for SodaCo"
        assert payload["entity_id"] == "SodaCo"
        assert payload["ts"].endswith("Z")
