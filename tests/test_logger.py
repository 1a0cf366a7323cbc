import logging

from earlystop.criteria import Patience
from earlystop.learning.callbacks import EarlyStopper
from earlystop.utils.logger import build_logger


def test_build_logger_writes_stop_diagnostics_to_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = build_logger("earlystop.test_file", "DEBUG", str(log_file))
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        # a second call reuses the configured handlers
        assert build_logger("earlystop.test_file", "DEBUG", str(log_file)) is logger
        assert len(logger.handlers) == 2

        stopper = EarlyStopper(Patience(n=1), verbosity=1, logger=logger)
        stopper.done(1.0)
        stopper.done(2.0)
        for h in logger.handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "loss=2.0" in text
        assert "step=2 state=PatienceState(loss=2.0, n_increases=1)" in text
        assert "| INFO | earlystop.test_file |" in text
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
