import sys
from typing import NoReturn, Optional

# Status for failures the shell cannot recover from: fork, pipe, redirection
# and exec errors.
FATAL_STATUS = 2


def perror(call: str, error: OSError, target: Optional[str] = None) -> None:
    """Print a "<call>: <reason>[: <target>]" diagnostic to stderr."""
    message = f"{call}: {error.strerror or error}"
    if target:
        message += f": {target}"
    print(message, file=sys.stderr, flush=True)


def fatal(call: str, error: OSError, target: Optional[str] = None) -> NoReturn:
    """Report a resource failure in the shell process and terminate it."""
    perror(call, error, target)
    sys.exit(FATAL_STATUS)
