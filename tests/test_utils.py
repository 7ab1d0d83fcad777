import logging

import numpy as np
import pytest

from varresistor.logging_config import setup_logging
from varresistor.utils import clamp, fmt_num, m2_to_mm2, mm2_to_m2


def test_area_unit_conversion():
    assert mm2_to_m2(2.0) == pytest.approx(2e-6)
    assert m2_to_mm2(3e-6) == pytest.approx(3.0)


def test_area_unit_conversion_on_arrays():
    areas = np.array([0.5, 1.0, 2.0])
    np.testing.assert_allclose(m2_to_mm2(mm2_to_m2(areas)), areas)


def test_clamp():
    assert clamp(-1.0, 0.0, 1.0) == 0.0
    assert clamp(2.0, 0.0, 1.0) == 1.0
    assert clamp(0.25, 0.0, 1.0) == 0.25


def test_fmt_num():
    assert fmt_num(3.14159) == "3.14"
    assert fmt_num(0.25, 3) == "0.250"


def test_setup_logging_console_and_file(tmp_path):
    log_file = tmp_path / "session.log"
    logger = logging.getLogger("varresistor")
    try:
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        assert len(logger.handlers) == 2

        logging.getLogger("varresistor.model.state").debug("probe moved")
        for handler in logger.handlers:
            handler.flush()
        assert "probe moved" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
