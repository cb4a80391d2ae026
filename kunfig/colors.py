import os

from colorama import Fore, Style, init

# Maps a log type to a terminal color; the single point of control for CLI colors.
COLOR_MAP = {
    "default": Fore.WHITE,
    "progress": Fore.GREEN,
    "info": Fore.CYAN,
    "verbose": Fore.BLUE,
    "warning": Fore.YELLOW,
    "error": Fore.RED,
    "success": Fore.GREEN + Style.BRIGHT,
    "key": Fore.MAGENTA + Style.BRIGHT,
    "caller": Fore.BLACK + Style.DIM,
}


def init_colorama():
    """Initialize colorama with appropriate settings for the current environment.

    Setting COLORAMA_STRIP=0 keeps ANSI codes even when stdout is piped.
    """
    keep_codes = os.environ.get("COLORAMA_STRIP", "").lower() == "0"
    init(autoreset=True, strip=False if keep_codes else None, convert=False if keep_codes else None)


def get_color(log_type: str) -> str:
    """Returns the colorama color code for a log type, or white if not found.

    Args:
        log_type: Log type key (e.g., 'info', 'warning', 'error').

    Returns:
        Colorama color code string.
    """
    return COLOR_MAP.get(log_type, Fore.WHITE)
