"""Console logging for the checkstate CLI."""

from __future__ import annotations

import logging

# httpx and httpcore log every request at INFO; a refresh touches every check.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False) -> None:
    """Initialise the root logger for CLI output.

    ``verbose`` lowers the level to DEBUG, which shows the differing paths
    behind each replacement and the individual API requests.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
