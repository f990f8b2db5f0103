import unittest
from pathlib import Path
import sys

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_DIR = TESTS_DIR.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from m3u_cleaner.config import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, CleanerConfig
from m3u_cleaner.errors import ConfigError


class CleanerConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = CleanerConfig(input_path="in.m3u")
        self.assertEqual(50, DEFAULT_CONCURRENCY)
        self.assertEqual(5.0, DEFAULT_TIMEOUT)
        self.assertEqual(DEFAULT_USER_AGENT, config.user_agent)
        self.assertFalse(config.keep_server_errors)
        self.assertFalse(config.ignore_case)
        self.assertEqual("threads", config.engine)
        self.assertEqual(Path("in.m3u"), config.input_path)

    def test_target_defaults_to_input(self):
        self.assertEqual(Path("in.m3u"), CleanerConfig(input_path="in.m3u").target_path)
        config = CleanerConfig(input_path="in.m3u", output_path="out.m3u")
        self.assertEqual(Path("out.m3u"), config.target_path)

    def test_rejects_bad_values(self):
        bad = [
            {"concurrency": 0},
            {"concurrency": -3},
            {"concurrency": 2.5},
            {"timeout": 0},
            {"timeout": -1},
            {"timeout": float("nan")},
            {"max_redirects": 0},
            {"engine": "processes"},
            {"user_agent": "  "},
        ]
        for kwargs in bad:
            with self.subTest(**kwargs):
                with self.assertRaises(ConfigError):
                    CleanerConfig(input_path="in.m3u", **kwargs)

    def test_config_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            CleanerConfig(input_path="in.m3u", concurrency=0)


if __name__ == "__main__":
    unittest.main()
