"""Logging setup for vpp-api-gen.

All modules obtain their logger through :func:`get_logger` so that every
diagnostic lives under the ``vpp_api_gen`` namespace. Diagnostics are written
to stderr through Rich so they never mix with generated output on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "vpp_api_gen"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` placed under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured ``logging.Logger``.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, console: Console | None = None) -> logging.Logger:
    """Install the Rich stderr handler on the package logger.

    Calling this more than once replaces the previous handler, so the CLI can
    be invoked repeatedly in the same process (tests do this).

    Args:
        verbosity: Number of ``-v`` flags given on the command line.
        console: Console to log to, defaults to a stderr console.

    Returns:
        The package root logger.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbosity > 2,
        markup=False,
    )
    _handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(_handler)
    root.setLevel(verbosity_to_level(verbosity))
    return root
