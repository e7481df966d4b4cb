"""Entry point — wires Config → logging → typer app."""
import logging

from rich.console import Console
from rich.logging import RichHandler

from fastwhisper_client.cli import app
from fastwhisper_client.config import Config


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(console=Console(stderr=True), rich_tracebacks=True))


def main() -> None:
    # Commands that need the service report a missing key themselves,
    # so `--help` and `formats` still work without one.
    try:
        config = Config.from_env()
    except ValueError:
        config = None
    match config:
        case Config(log_level=level):
            _setup_logging(level)
        case None:
            _setup_logging("INFO")
    app(obj=config)


if __name__ == "__main__":
    main()
