# src/leversguard/utils/configure_logging.py
import logging
import sys

from tqdm import tqdm


class LogWithTqdm(logging.Handler):
    """
    A logging handler that writes through `tqdm.write()` so log lines do not
    tear the progress bar of a batch scan.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def configure_logger(general_level='WARNING', module_specific_levels=None):
    """
    Configures the root logger with a TQDM-friendly handler and optional
    per-module levels.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    ))

    root_logger = logging.getLogger()
    if isinstance(general_level, str):
        log_level = getattr(logging, general_level.upper(), logging.WARNING)
    else:
        log_level = general_level
    root_logger.setLevel(log_level)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        level_to_set = getattr(logging, level.upper(), logging.INFO) if isinstance(level, str) else level
        logging.getLogger(name).setLevel(level_to_set)
