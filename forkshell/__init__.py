"""forkshell: an interactive shell that runs commands with fork/exec, pipes and redirection."""

__version__ = "1.0.0"
