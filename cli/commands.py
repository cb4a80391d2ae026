"""CLI commands for inspecting configuration trees."""

import logging
from argparse import Namespace

from kunfig.config import apply_environment, dumps, load_configs
from kunfig.logging_manager import LoggingMixin


class ShowCommand(LoggingMixin):
    """Loads, merges and prints configuration files."""

    def __init__(self, args: Namespace):
        self.args = args
        self.progress_logger = logging.getLogger("progress")
        self.verbose_logger = logging.getLogger("verbose")

    def run(self) -> int:
        """Prints the merged tree (or one value of it) as JSON.

        Returns:
            The process exit status: 0 on success, 1 if a file could not be
            loaded or the requested path does not exist.
        """
        try:
            config = load_configs(*self.args.configs)
        except (FileNotFoundError, ValueError) as e:
            self.verbose_logger.error(f"Error: {e}")
            return 1
        self._log(f"Merged {len(self.args.configs)} file(s) into {config.count()} top-level key(s).", level="progress", log_type="success")

        if self.args.env_prefix:
            apply_environment(config, prefix=self.args.env_prefix, dotenv_path=self.args.dotenv)

        if self.args.path is None:
            print(dumps(config, indent=self.args.indent))
            return 0

        if not config.has(self.args.path):
            self.verbose_logger.warning(f"Path not found: {self.args.path}")
            print(dumps(None))
            return 1
        print(dumps(config.get(self.args.path), indent=self.args.indent))
        return 0


def show_version():
    """Print the installed kunfig version."""
    import kunfig

    print(f"kunfig {kunfig.__version__}")
