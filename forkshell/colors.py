COLORS = {
    "RESET": "\033[0m",
    "RED": "\033[1;31m",
    "GREEN": "\033[1;32m",
    "YELLOW": "\033[1;33m",
    "BLUE": "\033[1;34m",
    "CYAN": "\033[1;36m",
    "WHITE": "\033[1;37m",
}


def colorize(text: str, color_name: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{COLORS.get(color_name, '')}{text}{COLORS['RESET']}"
