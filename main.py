"""Build or inspect NGEN NSL script files.

Usage:
    python main.py demo [--out PATH] [--listing PATH]
    python main.py inspect PATH
"""
from __future__ import annotations

import argparse
import logging
import sys

from nslscript.app.config import ConfigManager
from nslscript.domain.commands import End, Set
from nslscript.domain.errors import NslDecodeError
from nslscript.domain.operands import constant, step_pitch, step_velocity
from nslscript.logging_setup import configure_logging
from nslscript.script import NslScript, new_script


def build_demo_script() -> NslScript:
    script = new_script()
    script.add_command(Set(step_pitch(0), constant(36)))  # pitch of the first step
    script.add_command(Set(step_velocity(0), constant(100)))  # velocity of the first step
    script.add_command(End())
    return script


def _cmd_demo(args: argparse.Namespace, config: ConfigManager, logger: logging.Logger) -> int:
    script = build_demo_script()
    logger.info("Commands added to the script: %d", len(script))

    out_path = args.out or config.output_path
    listing_path = args.listing or config.listing_path
    try:
        script.export(out_path)
        if listing_path:
            script.export_listing(listing_path)
    except OSError as exc:
        logger.error("Failed to write script: %s", exc)
        return 1

    print(script.listing(), end="")
    return 0


def _cmd_inspect(args: argparse.Namespace, config: ConfigManager, logger: logging.Logger) -> int:
    try:
        script = NslScript.import_file(args.path)
    except OSError as exc:
        logger.error("Failed to read %s: %s", args.path, exc)
        return 1
    except NslDecodeError as exc:
        logger.error("%s is not a valid NSL script: %s", args.path, exc)
        return 1

    script.describe()
    print(script.listing(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also use NSL_LOG_LEVEL env var.",
    )
    parser.add_argument(
        "--config",
        default="nslscript.json",
        help="JSON config file. Default: nslscript.json (missing file means defaults).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Write the example script (step 0 pitch 36, velocity 100).")
    demo.add_argument("--out", default=None, help="Output script path. Default from config.")
    demo.add_argument("--listing", default=None, help="Also write a hex listing to this path.")
    demo.set_defaults(handler=_cmd_demo)

    inspect = sub.add_parser("inspect", help="Decode a script file and print its listing.")
    inspect.add_argument("path")
    inspect.set_defaults(handler=_cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(cli_level=args.log_level)
    config = ConfigManager(args.config)
    if args.log_level is None and config.log_level is not None:
        configure_logging(cli_level=config.log_level)
    logger = logging.getLogger("main")

    return args.handler(args, config, logger)


if __name__ == "__main__":
    sys.exit(main())
