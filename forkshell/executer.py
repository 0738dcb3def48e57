import logging
import os
import signal
import sys
from typing import Callable, List, Optional, Tuple

from forkshell.ast_tree import Command, LaunchResult, Pipeline
from forkshell.errors import FATAL_STATUS, fatal, perror
from forkshell.jobs import BackgroundJobRegistry
from forkshell.redirection import STDIN_FILENO, STDOUT_FILENO, apply_redirections

logger = logging.getLogger(__name__)

PipeEnds = Tuple[int, int]

# Ignored by the interpreter at startup; exec keeps ignored dispositions.
INHERITED_IGNORED_SIGNALS = ("SIGPIPE", "SIGXFSZ")


def _restore_signals() -> None:
    for name in INHERITED_IGNORED_SIGNALS:
        if hasattr(signal, name):
            signal.signal(getattr(signal, name), signal.SIG_DFL)


def _exec_child(cmd: Command, prepare: Optional[Callable[[], None]] = None) -> None:
    """
    Body of a freshly forked child: bind descriptors, then become ``cmd``.
    Never returns; if exec does not happen the child exits with FATAL_STATUS.
    """
    try:
        _restore_signals()
        if prepare is not None:
            prepare()
        apply_redirections(cmd)
        os.execvp(cmd.name, cmd.args)
    except OSError as e:
        perror("execvp", e, cmd.name)
    except Exception:
        logger.exception("child %d failed before exec of %s", os.getpid(), cmd.name)
    finally:
        os._exit(FATAL_STATUS)


class ProcessLauncher:
    """
    Runs one command in a child process, in the foreground or detached.
    """

    def __init__(self, registry: BackgroundJobRegistry) -> None:
        self.registry = registry

    def spawn(self, cmd: Command, prepare: Optional[Callable[[], None]] = None) -> int:
        # Pending output must not be duplicated into the child.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            pid = os.fork()
        except OSError as e:
            fatal("fork", e)

        if pid == 0:
            _exec_child(cmd, prepare)

        logger.debug("forked %d for %s", pid, cmd)
        return pid

    def launch(self, cmd: Command, foreground: bool = True) -> LaunchResult:
        pid = self.spawn(cmd)

        if not foreground:
            self.registry.register(pid, str(cmd))
            return LaunchResult(pid, foreground=False)

        _, status = os.waitpid(pid, 0)
        code = os.waitstatus_to_exitcode(status)
        logger.debug("child %d exited with %d", pid, code)
        if code > 1:
            # A failing foreground child (exec failure included) ends the
            # session with the child's own status.
            logger.debug("propagating exit status %d from %s", code, cmd.name)
            sys.exit(code)
        return LaunchResult(pid, foreground=True, status=code)


def _close_pipes(pipes: List[PipeEnds]) -> None:
    for read_end, write_end in pipes:
        os.close(read_end)
        os.close(write_end)


class PipelineOrchestrator:
    """
    Runs ``cmd1 | cmd2 | ... | cmdN`` and waits for every stage.
    """

    def __init__(self, launcher: ProcessLauncher) -> None:
        self.launcher = launcher

    def open_pipes(self, count: int) -> List[PipeEnds]:
        pipes = []
        for _ in range(count):
            try:
                pipes.append(os.pipe())
            except OSError as e:
                fatal("pipe", e)
        return pipes

    def _stage_binder(self, pipes: List[PipeEnds], index: int) -> Callable[[], None]:
        def bind() -> None:
            try:
                if index > 0:
                    os.dup2(pipes[index - 1][0], STDIN_FILENO)
                if index < len(pipes):
                    os.dup2(pipes[index][1], STDOUT_FILENO)
            except OSError as e:
                perror("dup2", e)
                os._exit(FATAL_STATUS)
            _close_pipes(pipes)

        return bind

    def run(self, pipeline: Pipeline) -> List[int]:
        logger.debug("running pipeline %s", pipeline)
        if pipeline.background:
            logger.debug("pipelines always run in the foreground, ignoring '&'")

        pipes = self.open_pipes(len(pipeline) - 1)
        logger.debug("allocated %d pipes for %d stages", len(pipes), len(pipeline))

        pids = []
        for index, cmd in enumerate(pipeline):
            pids.append(self.launcher.spawn(cmd, self._stage_binder(pipes, index)))

        _close_pipes(pipes)

        for pid in pids:
            os.waitpid(pid, 0)
            logger.debug("pipeline stage %d finished", pid)
        return pids
