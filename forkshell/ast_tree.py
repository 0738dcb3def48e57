from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple


class Command(NamedTuple):
    """
    One command of a line: argv plus its file redirections.
    """

    args: Tuple[str, ...]
    in_file: Optional[str] = None
    out_file: Optional[str] = None
    background: bool = False

    @property
    def name(self) -> str:
        return self.args[0]

    def has_input(self) -> bool:
        return self.in_file is not None

    def has_output(self) -> bool:
        return self.out_file is not None

    def is_background(self) -> bool:
        return self.background

    def __str__(self) -> str:
        parts = [f'"{arg}"' if " " in arg else arg for arg in self.args]
        if self.has_input():
            parts.append(f"< {self.in_file}")
        if self.has_output():
            parts.append(f"> {self.out_file}")
        return " ".join(parts)


@dataclass(frozen=True)
class Pipeline:
    """
    Commands joined by pipes, in left-to-right order.
    A single command is a pipeline of length one.
    """

    commands: Tuple[Command, ...]

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __getitem__(self, index: int) -> Command:
        return self.commands[index]

    def is_piped(self) -> bool:
        return len(self.commands) > 1

    @property
    def background(self) -> bool:
        return any(cmd.background for cmd in self.commands)

    def __str__(self) -> str:
        text = " | ".join(str(cmd) for cmd in self.commands)
        return f"{text} &" if self.background else text


class LaunchResult(NamedTuple):
    pid: int
    foreground: bool
    status: Optional[int] = None


class Job:
    """
    A spawned process and the line it was launched from.
    """

    def __init__(self, pid: int, cmd: str, job_id: int = 0) -> None:
        self.pid = pid
        self.cmd = cmd
        self.job_id = job_id
        self.status = "running"

    def __repr__(self) -> str:
        return f"Job(id=({self.job_id}), pid=({self.pid}), cmd=({self.cmd}), status=({self.status}))"
