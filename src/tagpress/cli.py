"""Command line entry point: ``tagpress build`` and ``tagpress serve``."""

import argparse
import logging
import sys
from pathlib import Path

from tagpress.config import settings
from tagpress.core.errors import TagpressError

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def cmd_build(args: argparse.Namespace) -> int:
    from tagpress.site import build_site

    try:
        report = build_site(settings, content_dir=args.content, output_dir=args.output)
    except TagpressError as e:
        logger.error("Build failed: %s", e)
        return 1
    logger.info(
        "Built %d posts and %d tag pages into %s",
        report.documents,
        report.tags,
        report.output_dir,
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("tagpress.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagpress",
        description="Build or preview a tagged Markdown blog",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Render the static site")
    build.add_argument("--content", type=Path, default=None,
                       help=f"Content directory (default: {settings.content_dir})")
    build.add_argument("--output", type=Path, default=None,
                       help=f"Output directory (default: {settings.output_dir})")
    build.set_defaults(func=cmd_build)

    serve = subparsers.add_parser("serve", help="Run the preview server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
