"""
Fakedis CLI - Interactive console over an in-process store.

Usage: python -m fakedis [--config FILE] [--loglevel LEVEL]
"""

import argparse
import logging
import sys
from typing import Any, List, Optional

from .commands import CommandError
from .config import Config
from .connection import FakeConnection
from .version import __version__

logger = logging.getLogger("fakedis")


def setup_logging(level: str = "info", logfile: str = ""):
    """Setup logging configuration."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    if logfile:
        handler = logging.FileHandler(logfile)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))

    logger.setLevel(log_level)
    logger.addHandler(handler)


def format_reply(reply: Any, indent: int = 0) -> str:
    """Format a reply value the way redis-cli displays it."""
    if reply is None:
        return "(nil)"
    if isinstance(reply, CommandError):
        return f"(error) {reply.message}"
    if isinstance(reply, bool):
        return f"(integer) {int(reply)}"
    if isinstance(reply, int):
        return f"(integer) {reply}"
    if isinstance(reply, float):
        return f'"{reply}"'
    if isinstance(reply, list):
        return _format_array(reply, indent)
    return f'"{reply}"'


def _format_array(items: List[Any], indent: int) -> str:
    """Format array response."""
    if not items:
        return "(empty list or set)"

    width = len(str(len(items)))
    pad = " " * indent
    lines = []
    for item_num, item in enumerate(items, 1):
        label = f"{item_num:>{width}}) "
        body = format_reply(item, indent + len(label))
        prefix = label if item_num == 1 else pad + label
        lines.append(prefix + body)
    return "\n".join(lines)


class FakedisCLI:
    """Interactive CLI client for an in-process Fakedis store."""

    def __init__(self, connection: Optional[FakeConnection] = None):
        self.connection = connection or FakeConnection()

    def send_command(self, command: List[str]) -> str:
        """Execute command and format the reply."""
        if not self.connection.connected:
            self.connection.reconnect()
        self.connection.write(command)
        return format_reply(self.connection.read())

    def parse_input(self, line: str) -> List[str]:
        """Parse user input into command parts."""
        parts = []
        current = []
        in_quotes = False
        quote_char = None
        has_token = False

        for char in line:
            if char in ('"', "'") and not in_quotes:
                in_quotes = True
                quote_char = char
                has_token = True
            elif char == quote_char and in_quotes:
                in_quotes = False
                quote_char = None
            elif char.isspace() and not in_quotes:
                if has_token:
                    parts.append(''.join(current))
                    current = []
                    has_token = False
            else:
                current.append(char)
                has_token = True

        if has_token:
            parts.append(''.join(current))

        return parts

    def run(self, stdin=None) -> int:
        """Run interactive CLI loop."""
        interactive = stdin is None and sys.stdin.isatty()
        lines = iter(stdin) if stdin is not None else None
        print(f"Fakedis {__version__} (in-process store)")
        if interactive:
            print("Type 'quit' or 'exit' to close.\n")

        try:
            while True:
                try:
                    if lines is not None:
                        line = next(lines, None)
                        if line is None:
                            break
                        line = line.strip()
                    else:
                        line = input("fakedis> " if interactive else "").strip()

                    if not line:
                        continue

                    if line.lower() in ('quit', 'exit'):
                        break

                    if line.lower() == 'clear':
                        print('\033[2J\033[H', end='')
                        continue

                    if line.lower() == 'help':
                        self._print_help()
                        continue

                    command = self.parse_input(line)
                    if command:
                        print(self.send_command(command))

                except KeyboardInterrupt:
                    print("\nUse 'quit' to exit")
                except EOFError:
                    break

        finally:
            self.connection.close()

        return 0

    def _print_help(self):
        """Print help message."""
        print("""
Fakedis CLI Help
================
Enter Redis commands directly, for example:
  SET foo bar
  GET foo
  LPUSH mylist item1 item2
  KEYS *

Special commands:
  quit, exit - Close the console
  clear      - Clear the screen
  help       - Show this help message
""")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Fakedis CLI")
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="Configuration file")
    parser.add_argument("--loglevel", "-l", type=str, default=None,
                        choices=["debug", "info", "warning", "error"],
                        help="Log level")

    args = parser.parse_args(argv)

    config = Config.from_file(args.config) if args.config else Config()
    if args.loglevel:
        config.loglevel = args.loglevel
    setup_logging(config.loglevel, config.logfile)

    cli = FakedisCLI(FakeConnection(config=config))
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
