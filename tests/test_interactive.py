import os
import sys
import tempfile
import unittest

import pexpect

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class TestInteractiveShell(unittest.TestCase):
    """Runs the shell on a pseudo-terminal, the way a user would."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        env = dict(os.environ)
        env["PYTHONPATH"] = PROJECT_ROOT + os.pathsep + env.get("PYTHONPATH", "")
        env["FORKSHELL_COLORS"] = "0"
        self.shell = pexpect.spawn(
            sys.executable,
            ["-m", "forkshell"],
            cwd=self.temp_dir.name,
            env=env,
            encoding="utf-8",
            timeout=10,
        )

    def tearDown(self):
        self.shell.close(force=True)
        self.temp_dir.cleanup()

    def run_case(self, inputs, expected_outputs):
        for input_line, expected in zip(inputs, expected_outputs):
            self.shell.expect(r"\$ ")
            self.shell.sendline(input_line)
            if expected:
                self.shell.expect(expected)

    def finish(self):
        self.shell.expect(r"\$ ")
        self.shell.sendline("exit")
        self.shell.expect("Goodbye")
        self.shell.expect(pexpect.EOF)
        self.shell.close()
        self.assertEqual(self.shell.exitstatus, 0)

    def test_redirection_and_read_back(self):
        self.run_case(
            ["echo hola mundo > test.txt", "cat < test.txt"],
            ["", "hola mundo"],
        )
        self.finish()

    def test_pipes(self):
        self.run_case(["echo uno dos tres | tr ' ' '\\n' | sort"], [r"dos\r\ntres\r\nuno"])
        self.finish()

    def test_background_job(self):
        self.run_case(["sleep 2 &", "echo done"], [r"\[1\] \d+", "done"])
        self.finish()

    def test_invalid_input(self):
        self.run_case(["cat < ", "echo ok"], ["Invalid Input", "ok"])
        self.finish()

    def test_missing_command_ends_session(self):
        self.shell.expect(r"\$ ")
        self.shell.sendline("forkshell-test-no-such-command")
        self.shell.expect(pexpect.EOF)
        self.shell.close()
        self.assertEqual(self.shell.exitstatus, 2)


if __name__ == "__main__":
    unittest.main()
