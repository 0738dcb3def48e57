import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ShellConfig:
    """Settings read once at startup. The shell takes no command-line flags."""

    use_colors: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    user: str = "user"
    prompt_time_format: str = "%b %d %H:%M:%S"

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, stream: Optional[TextIO] = None
    ) -> "ShellConfig":
        environ = os.environ if environ is None else environ
        stream = sys.stdout if stream is None else stream

        forced = environ.get("FORKSHELL_COLORS")
        if forced is not None:
            use_colors = forced.strip().lower() in ("1", "true", "yes", "on")
        else:
            use_colors = "NO_COLOR" not in environ and stream.isatty()

        log_level = environ.get("FORKSHELL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = DEFAULT_LOG_LEVEL

        return cls(
            use_colors=use_colors,
            log_level=log_level,
            user=environ.get("USER") or "user",
        )


def setup_logging(config: ShellConfig) -> None:
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT, stream=sys.stderr)
