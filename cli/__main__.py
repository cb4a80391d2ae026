"""Main CLI entry point for kunfig."""

import argparse
import sys


def create_parser():
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="kunfig",
        description="kunfig - Inspect layered JSON configuration trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-dir", type=str, default=None, help="Also write logs to a file in this directory.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every loaded file and applied variable.")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.required = True

    # show command
    show_parser = subparsers.add_parser("show", help="Merge configuration files and print the result as JSON")
    show_parser.add_argument(
        "configs",
        type=str,
        nargs="+",
        help="Configuration files, merged left to right (e.g., base.json local.json).",
    )
    show_parser.add_argument("--get", dest="path", type=str, default=None, help="Only print the value at this dotted path.")
    show_parser.add_argument(
        "--env-prefix",
        type=str,
        default=None,
        help="Overlay environment variables named <PREFIX>__SECTION__KEY (e.g., KUNFIG).",
    )
    show_parser.add_argument("--dotenv", type=str, default=None, help="Path of a .env file read before the overlay.")
    show_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2).")

    # version command
    subparsers.add_parser("version", help="Show kunfig version information")

    return parser


def main(argv=None) -> int:
    """Main entry point for kunfig CLI."""
    import logging

    from kunfig.logging_manager import setup_loggers, shutdown_loggers

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_loggers(log_dir=args.log_dir, level=logging.INFO if args.verbose else logging.WARNING)
    try:
        if args.command == "version":
            from cli.commands import show_version

            show_version()
            return 0

        from cli.commands import ShowCommand

        return ShowCommand(args).run()
    finally:
        shutdown_loggers()


if __name__ == "__main__":
    sys.exit(main())
