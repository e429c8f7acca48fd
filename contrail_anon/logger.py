import logging
import sys
from pathlib import Path

from concurrent_log_handler import ConcurrentRotatingFileHandler

from contrail_anon.common.constants import LOGS_DIR_NAME, LOGS_FILE_NAME
from contrail_anon.common.enums import VerboseOptions

LOG_LEVELS = {
    VerboseOptions.DEBUG: logging.DEBUG,
    VerboseOptions.INFO: logging.INFO,
    VerboseOptions.ERROR: logging.ERROR,
}


class Logger:
    """
    Process wide logger of contrail_anon: stdout and a rotating file in the run dir.

    The file handler is safe to share between the table worker processes.
    """
    _instance = None
    _formatter: logging.Formatter

    logger = None
    log_file: Path = None

    def __new__(cls):
        if cls._instance is not None:
            return cls._instance

        cls._instance = super().__new__(cls)
        cls._instance.logger = logging.getLogger('contrail_anon.logger')
        cls._instance.logger.setLevel(logging.INFO)
        cls._instance.logger.propagate = False

        cls._instance._formatter = logging.Formatter(
            datefmt="%Y-%m-%d %H:%M:%S",
            fmt="%(asctime)s,%(msecs)03d - %(levelname)8s - %(message)s",
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(cls._instance._formatter)
        cls._instance.logger.addHandler(handler)

        return cls._instance

    def set_run_dir(self, run_dir: Path):
        log_file = run_dir / LOGS_DIR_NAME / LOGS_FILE_NAME
        if log_file == self.log_file:
            return

        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                self.logger.removeHandler(handler)
                handler.close()

        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = ConcurrentRotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=10,
        )
        file_handler.setFormatter(self._formatter)
        self.logger.addHandler(file_handler)
        self.log_file = log_file

    def set_verbose(self, verbose: VerboseOptions):
        self.logger.setLevel(LOG_LEVELS.get(verbose, logging.INFO))


def get_logger():
    return Logger().logger


def logger_set_run_dir(run_dir: Path):
    Logger().set_run_dir(run_dir)


def logger_set_verbose(verbose: VerboseOptions):
    Logger().set_verbose(verbose)
