"""
Main entry point for level_compiler.
Usage: python -m level_compiler build [--input DIR] [--output DIR]
       python -m level_compiler texture "HELLO\\nworld" --out sign.png
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .maps import MapCompilerError, MapCompilerService
from .settings import CompilerSettings, ConfigError
from .textures import SignTextureGenerator
from .utils.logging_config import setup_logging

EXIT_OK = 0
EXIT_MAP_FAILURES = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="level-compiler",
        description="Compile ASCII level maps into Elm modules and render sign textures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s build
  %(prog)s build --input levels --output src/Level --report build/levels.json
  %(prog)s build --config level_compiler.json -v
  %(prog)s texture "KEEP OUT\\nno really" --out sign.png
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, help="JSON settings file")
    common.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser(
        "build", parents=[common], help="Compile all maps of a directory"
    )
    build.add_argument("--input", type=Path, help="Directory holding map files")
    build.add_argument("--output", type=Path, help="Directory for generated Elm modules")
    build.add_argument("--report", type=Path, help="Write a JSON build report")
    build.add_argument("--workers", type=int, help="Number of parallel workers")

    texture = subparsers.add_parser(
        "texture", parents=[common], help="Render a sign texture to PNG"
    )
    texture.add_argument("text", help="Sign text; a literal \\n starts a new line")
    texture.add_argument("--out", type=Path, required=True, help="PNG file to write")
    texture.add_argument("--font", type=Path, help="TrueType font file")

    return parser


def apply_overrides(settings: CompilerSettings, args: argparse.Namespace) -> None:
    """Apply command line options on top of the config file."""
    if args.verbose:
        settings.console_log_level = "DEBUG"
    if args.command == "build":
        if args.input:
            settings.input_dir = args.input
        if args.output:
            settings.output_dir = args.output
        if args.report:
            settings.report_file = args.report
        if args.workers:
            settings.max_workers = args.workers
    elif args.command == "texture" and args.font:
        settings.font_path = args.font


def run_build(settings: CompilerSettings) -> int:
    logger = logging.getLogger(f"{__name__}.build")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return EXIT_FATAL

    report = MapCompilerService(settings).compile_directory()

    report_file = settings.report_file
    if report_file:
        report.write_json(report_file)
        logger.info(f"Build report written to {report_file}")

    if not report.ok:
        for failure in report.failures:
            location = f"{failure.file}:{failure.line}" if failure.line else str(failure.file)
            logger.error(f"FAILED {location}: {failure.message}")
        return EXIT_MAP_FAILURES
    return EXIT_OK


def run_texture(settings: CompilerSettings, text: str, out: Path) -> int:
    logger = logging.getLogger(f"{__name__}.texture")
    generator = SignTextureGenerator(settings.font_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(generator.render_png(text.replace("\\n", "\n")))
    logger.info(f"Sign texture written to {out}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    try:
        settings = CompilerSettings(args.config)
        apply_overrides(settings, args)
        setup_logging(settings)

        if args.command == "build":
            return run_build(settings)
        return run_texture(settings, args.text, args.out)

    except (ConfigError, MapCompilerError) as e:
        logger.error(str(e))
        return EXIT_FATAL
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
