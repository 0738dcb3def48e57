import io
import unittest

from forkshell.colors import COLORS, colorize
from forkshell.config import ShellConfig


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestShellConfig(unittest.TestCase):
    def test_defaults_without_tty(self):
        config = ShellConfig.from_env({}, io.StringIO())
        self.assertFalse(config.use_colors)
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.user, "user")

    def test_colors_follow_tty_and_no_color(self):
        self.assertTrue(ShellConfig.from_env({}, FakeTTY()).use_colors)
        self.assertFalse(ShellConfig.from_env({"NO_COLOR": "1"}, FakeTTY()).use_colors)

    def test_forced_colors(self):
        self.assertTrue(ShellConfig.from_env({"FORKSHELL_COLORS": "1"}, io.StringIO()).use_colors)
        self.assertFalse(ShellConfig.from_env({"FORKSHELL_COLORS": "0"}, FakeTTY()).use_colors)

    def test_log_level(self):
        env = {"FORKSHELL_LOG_LEVEL": "debug", "USER": "alice"}
        config = ShellConfig.from_env(env, io.StringIO())
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.user, "alice")
        bogus = ShellConfig.from_env({"FORKSHELL_LOG_LEVEL": "loud"}, io.StringIO())
        self.assertEqual(bogus.log_level, "WARNING")

    def test_colorize(self):
        self.assertEqual(colorize("x", "RED", enabled=False), "x")
        self.assertEqual(colorize("x", "RED"), f"{COLORS['RED']}x{COLORS['RESET']}")


if __name__ == "__main__":
    unittest.main()
