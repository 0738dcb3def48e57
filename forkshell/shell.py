import logging
import os
import sys
import time
from typing import Optional, Sequence

from forkshell.ast_tree import Pipeline
from forkshell.colors import colorize
from forkshell.config import ShellConfig, setup_logging
from forkshell.executer import PipelineOrchestrator, ProcessLauncher
from forkshell.jobs import BackgroundJobRegistry
from forkshell.parser import parse_line

logger = logging.getLogger(__name__)


class Shell:
    """
    The interactive loop: reap, prompt, read, parse, dispatch.
    """

    def __init__(self, config: Optional[ShellConfig] = None) -> None:
        self.config = config or ShellConfig()
        self.registry = BackgroundJobRegistry()
        self.launcher = ProcessLauncher(self.registry)
        self.orchestrator = PipelineOrchestrator(self.launcher)
        self.prev_dir = os.getcwd()

    def color(self, text: str, color_name: str) -> str:
        return colorize(text, color_name, self.config.use_colors)

    def prompt(self) -> str:
        stamp = time.strftime(self.config.prompt_time_format, time.localtime())
        try:
            cwd = os.getcwd()
        except OSError as e:
            logger.warning("getcwd() error: %s", e)
            cwd = ""
        return self.color(f"{stamp} {self.config.user}:{cwd}$ ", "YELLOW")

    def read_line(self) -> Optional[str]:
        try:
            return input(self.prompt())
        except EOFError:
            return None

    def farewell(self) -> None:
        print(self.color("Now exiting shell...\nGoodbye", "RED"), flush=True)

    def change_directory(self, args: Sequence[str]) -> bool:
        if len(args) > 1:
            print(self.color("cd: too many arguments", "RED"), file=sys.stderr)
            return False

        if not args:
            target = os.path.expanduser("~")
        elif args[0] == "-":
            target = self.prev_dir
        else:
            target = args[0]

        current_dir = os.getcwd()
        try:
            os.chdir(target)
        except OSError as e:
            logger.debug("chdir(%r) failed: %s", target, e)
            print(self.color(f"cd: directory not found: {target}", "RED"), file=sys.stderr)
            return False

        self.prev_dir = current_dir
        return True

    def dispatch(self, line: str) -> None:
        if not line.strip():
            return

        try:
            pipeline = parse_line(line)
        except (SyntaxError, ValueError) as e:
            logger.debug("rejected %r: %s", line, e)
            print("Invalid Input", flush=True)
            return

        self.execute(pipeline)

    def execute(self, pipeline: Pipeline) -> None:
        first = pipeline[0]
        if first.name == "cd":
            self.change_directory(first.args[1:])
        elif pipeline.is_piped():
            self.orchestrator.run(pipeline)
        else:
            result = self.launcher.launch(first, foreground=not first.is_background())
            if not result.foreground:
                job = self.registry.jobs[result.pid]
                print(self.color(f"[{job.job_id}] {job.pid}", "CYAN"), file=sys.stderr, flush=True)

    def run(self) -> int:
        while True:
            for job in self.registry.reap_all():
                logger.info("background job done: %r", job)

            try:
                line = self.read_line()
            except KeyboardInterrupt:
                print()
                continue

            if line is None or line.strip() == "exit":
                self.farewell()
                return 0

            try:
                self.dispatch(line)
            except KeyboardInterrupt:
                # Unwaited children are collected by the next reap_all().
                print()


def main() -> None:
    config = ShellConfig.from_env()
    setup_logging(config)
    sys.exit(Shell(config).run())


if __name__ == "__main__":
    main()
