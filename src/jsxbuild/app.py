# src/jsxbuild/app.py

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from jsxbuild.cli.ascii import show_banner, show_build_summary
from jsxbuild.cli.controller import canvas
from jsxbuild.config.config import load_settings
from jsxbuild.errors import BuildError, CompilationError
from jsxbuild.pipeline.build import BuildPipeline, restore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsxbuild",
        description="Pre-compile the text/babel block embedded in a host HTML document.",
    )
    parser.add_argument("mode", nargs="?", choices=["build", "restore"], default="build",
                        help="build (default) compiles the document; restore puts the backup back")
    parser.add_argument("--restore", dest="restore_flag", action="store_true",
                        help="Same as the restore mode")
    parser.add_argument("--input", "-i", help="Host document path (default: web/index.html)")
    parser.add_argument("--build-dir", help="Directory holding the Babel toolchain")
    parser.add_argument("--config", "-c", help="YAML config file (default: ./jsxbuild.yaml if present)")
    parser.add_argument("--timeout", type=int, help="Compiler timeout in seconds")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Show diagnostic logging (-vv for debug)")
    return parser


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def report_failure(error: BuildError, stage: str = "Build"):
    canvas.error(str(error))
    if isinstance(error, CompilationError) and error.diagnostics:
        canvas.verbatim(error.diagnostics)
    if error.hint:
        canvas.info(error.hint)
    canvas.error(f"{stage} failed!")


def main(argv=None) -> int:
    """Entry point for the jsxbuild CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")
    configure_logging(args.verbose)
    load_dotenv()

    show_banner()

    mode = "restore" if args.restore_flag else args.mode
    try:
        settings = load_settings(args.config).with_overrides(
            input_path=Path(args.input) if args.input else None,
            build_dir=Path(args.build_dir) if args.build_dir else None,
            compiler_timeout=args.timeout,
        )
        if mode == "restore":
            restore(settings)
            return 0

        result = BuildPipeline(settings).run()
    except BuildError as e:
        logger.debug("Build aborted", exc_info=True)
        report_failure(e, mode.capitalize())
        return 1

    show_build_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
