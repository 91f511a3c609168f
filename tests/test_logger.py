import logging
import unittest

from crossfinder.utils.logger import configure_logging, get_logger, resolve_level


class LoggerTests(unittest.TestCase):
    def test_resolve_level(self) -> None:
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" Info "), logging.INFO)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_level("loud"), logging.WARNING)
        self.assertEqual(resolve_level(None, default=logging.INFO), logging.INFO)

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            configure_logging("ERROR")
            configure_logging("DEBUG")
            self.assertEqual(len(root.handlers), 1)
            self.assertEqual(root.level, logging.DEBUG)
            self.assertEqual(get_logger().name, "crossfinder")
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
