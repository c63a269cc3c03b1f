from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from spoiler import logging_setup


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(logging_setup.APP_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logging_setup._HANDLER = None
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_parse_level(self) -> None:
        self.assertEqual(logging_setup.parse_level("debug"), logging.DEBUG)
        self.assertEqual(logging_setup.parse_level(" Info "), logging.INFO)
        self.assertEqual(logging_setup.parse_level("nonsense"), logging.WARNING)
        self.assertEqual(logging_setup.parse_level(None), logging.WARNING)

    def test_configure_writes_to_file_and_replaces_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logs" / "spoiler.log"
            self.assertEqual(logging_setup.configure_logging("info", path), path)
            self.assertEqual(logging_setup.configure_logging("info", path), path)

            logger = logging.getLogger("spoiler.state.sync")
            logger.info("refreshed %d jobs", 3)
            for handler in logging.getLogger(logging_setup.APP_LOGGER).handlers:
                handler.flush()

            self.assertEqual(len(logging.getLogger(logging_setup.APP_LOGGER).handlers), 1)
            text = path.read_text(encoding="utf-8")
            self.assertIn("spoiler.state.sync", text)
            self.assertIn("refreshed 3 jobs", text)

    def test_unwritable_path_disables_logging(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("x", encoding="utf-8")
            self.assertIsNone(logging_setup.configure_logging("debug", blocker / "sub" / "spoiler.log"))


if __name__ == "__main__":
    unittest.main()
