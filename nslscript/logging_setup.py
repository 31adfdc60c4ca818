from __future__ import annotations

import logging
import os


def configure_logging(*, cli_level: str | None = None) -> None:
    """Configure root logging for the NSL command-line tool.

    What shows up at each level:
    - INFO: files read and exported, config fallbacks, `NslScript.describe()` output
    - DEBUG: every command with its encoded bytes, every decoded offset
    - WARNING: scripts with an unknown format version

    Precedence:
    1) `cli_level` (e.g. from argparse)
    2) env var `NSL_LOG_LEVEL`
    3) default INFO

    Library code only creates module loggers; call this from the entrypoint.
    A second call replaces the first (`force=True`).
    """

    level_name = (cli_level or os.environ.get("NSL_LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
