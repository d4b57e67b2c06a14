"""Command-line interface for the container lifecycle targets.

    newsapi-ops build            # docker build -t <image>:<tag> .
    newsapi-ops run              # compose up -d
    newsapi-ops stop             # compose down
    newsapi-ops clean            # stop + remove images, containers, volumes
    newsapi-ops logs             # compose logs -f
    newsapi-ops db-shell         # psql inside the db container
    newsapi-ops db-view-tables   # \\dt inside the db container
    newsapi-ops all              # build + run
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from docker.errors import DockerException

from newsapi.core.config import get_settings
from newsapi.core.logging import get_logger, setup_logging
from newsapi.ops.stack import OpsError, StackManager


logger = get_logger("ops.cli")

TARGETS = {
    "all": "Build the image, then start the stack",
    "build": "Build the service image",
    "run": "Start services with Docker Compose",
    "stop": "Stop services",
    "clean": "Stop services and remove images, containers and volumes",
    "logs": "Stream compose logs",
    "db-shell": "Open an interactive psql session in the db container",
    "db-view-tables": "List tables in the database",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newsapi-ops",
        description="Build, run and inspect the news API container stack",
    )
    parser.add_argument("--compose-file", help="Compose file (default: settings.compose_file)")
    parser.add_argument("--image-tag", help="Image tag (default: settings.image_tag)")
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format",
    )
    sub = parser.add_subparsers(dest="target", metavar="TARGET", required=True)
    for name, help_text in TARGETS.items():
        target = sub.add_parser(name, help=help_text, description=help_text)
        if name == "logs":
            target.add_argument(
                "--no-follow",
                action="store_true",
                help="Print current logs and exit instead of streaming",
            )
    return parser


def run_target(stack: StackManager, args: argparse.Namespace) -> int:
    """Dispatch one target. Returns the process exit code."""
    target = args.target
    if target == "all":
        return stack.all()
    if target == "build":
        stack.build()
        return 0
    if target == "run":
        return stack.run()
    if target == "stop":
        return stack.stop()
    if target == "clean":
        report = stack.clean()
        if report.skipped:
            logger.warning(f"Skipped: {', '.join(report.skipped)}")
        return 0
    if target == "logs":
        return stack.logs(follow=not args.no_follow)
    if target == "db-shell":
        return stack.db_shell()
    if target == "db-view-tables":
        return stack.db_view_tables()
    raise ValueError(f"Unknown target: {target}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_format)

    overrides = {}
    if args.compose_file:
        overrides["compose_file"] = args.compose_file
    if args.image_tag:
        overrides["image_tag"] = args.image_tag
    settings = get_settings()
    if overrides:
        settings = settings.model_copy(update=overrides)

    stack = StackManager(settings)
    try:
        return run_target(stack, args)
    except KeyboardInterrupt:
        return 130
    except OpsError as e:
        logger.error(str(e))
        return e.exit_code
    except DockerException as e:
        logger.error(f"Docker error: {e}")
        return 1
    finally:
        stack.close()


if __name__ == "__main__":
    sys.exit(main())
