import logging
import tempfile
import unittest
from pathlib import Path

from contrail_anon.common.enums import VerboseOptions
from contrail_anon.logger import Logger, get_logger, logger_set_run_dir, logger_set_verbose


class LoggerUnitTest(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        logger = get_logger()
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
                handler.close()
        Logger().log_file = None
        logger_set_verbose(VerboseOptions.INFO)
        self.tmp_dir.cleanup()

    def test_file_handler_per_run_dir(self):
        logger_set_verbose(VerboseOptions.INFO)
        run_dir = Path(self.tmp_dir.name) / "run"
        logger_set_run_dir(run_dir)
        logger_set_run_dir(run_dir)

        logger = get_logger()
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        self.assertEqual(1, len(file_handlers))

        logger.info("written to the run log")
        for handler in file_handlers:
            handler.flush()
        self.assertIn("written to the run log", (run_dir / "logs" / "contrail_anon.log").read_text())

    def test_verbose_levels(self):
        logger_set_verbose(VerboseOptions.DEBUG)
        self.assertEqual(logging.DEBUG, get_logger().level)
        logger_set_verbose(VerboseOptions.ERROR)
        self.assertEqual(logging.ERROR, get_logger().level)
