"""
File redirection for a forked child.

These functions rebind fd 0/1 of the *current* process and call
``os._exit`` when that fails, so they must only run between fork and exec.
"""
import os

from forkshell.ast_tree import Command
from forkshell.errors import FATAL_STATUS, perror

STDIN_FILENO = 0
STDOUT_FILENO = 1

OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
OUTPUT_MODE = 0o644


def _bind(path: str, flags: int, target_fd: int, mode: int = 0o777) -> None:
    try:
        fd = os.open(path, flags, mode)
    except OSError as e:
        perror("open", e, path)
        os._exit(FATAL_STATUS)

    try:
        os.dup2(fd, target_fd)
    except OSError as e:
        perror("dup2", e)
        os.close(fd)
        os._exit(FATAL_STATUS)
    os.close(fd)


def redirect_input(path: str) -> None:
    _bind(path, os.O_RDONLY, STDIN_FILENO)


def redirect_output(path: str) -> None:
    _bind(path, OUTPUT_FLAGS, STDOUT_FILENO, OUTPUT_MODE)


def apply_redirections(cmd: Command) -> None:
    if cmd.has_input():
        redirect_input(cmd.in_file)
    if cmd.has_output():
        redirect_output(cmd.out_file)
