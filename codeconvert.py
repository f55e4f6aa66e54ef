"""Command-line front end for codeconvert.

Converts a source file into two target languages with the adaptive rule/model policy,
shows the model server status and the learning statistics, and changes persisted settings.

Examples:
    python codeconvert.py convert src/app.ts --to java python
    python codeconvert.py status
    python codeconvert.py set --mode always-model --threshold 0.7
    python codeconvert.py reset
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from config.loader import ConfigLoader, ConfigLoaderError
from core.converter import CodeConverter, ModelStatus
from core.state_storage import StateStorage, StateStorageError
from core.version import VERSION
from models.config_models import Config
from models.conversion_models import LANGUAGE_TEMPLATES, OPERATION_MODES
from utils.file_utils import FileUtils, FileUtilsError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from models.conversion_models import ConversionOutput

CFG_FILE: Final[str] = "codeconvert.ini"
SEPARATOR: Final[str] = "=" * 50


def check_python_version() -> None:
    """Check if Python version is 3.13 or later.

    Raises:
        RuntimeError: If Python version is below 3.13.
    """
    if sys.version_info < (3, 13):
        msg = "Python 3.13 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def _threshold(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        msg = f"invalid threshold: '{value}'"
        raise argparse.ArgumentTypeError(msg) from None
    if not 0.0 <= number <= 1.0:
        msg = f"threshold must be between 0 and 1: {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _add_setting_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mode", choices=OPERATION_MODES, help="Operation mode")
    parser.add_argument("--threshold", type=_threshold, metavar="0..1", help="Confidence threshold")
    parser.add_argument("--model", metavar="MODEL", help="Model identifier, e.g. codellama:7b")
    parser.add_argument("--url", metavar="URL", help="Model server base URL")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser with its subcommands."""
    languages: list[str] = list(LANGUAGE_TEMPLATES)
    parser = _ArgumentParser(
        prog="codeconvert",
        description="Convert code between languages with rule-based translation and a local LLM",
        epilog="Example: python codeconvert.py convert app.ts --to java python",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--config", dest="config_file", metavar="FILE", help=f"Configuration file (default: {CFG_FILE})"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    convert_parser = subparsers.add_parser("convert", help="Convert a source file into two target languages")
    convert_parser.add_argument("source_file", metavar="SOURCE_FILE", help="File to convert")
    convert_parser.add_argument(
        "--from", dest="from_lang", choices=languages, help="Source language (default: from the file extension)"
    )
    convert_parser.add_argument(
        "--to", dest="to_langs", nargs=2, choices=languages, metavar=("LANG1", "LANG2"), help="Two target languages"
    )
    _add_setting_options(convert_parser)

    subparsers.add_parser("status", help="Show model server status and learning statistics")
    subparsers.add_parser("reset", help="Reset learned patterns, statistics and history")

    set_parser = subparsers.add_parser("set", help="Change and persist runtime settings")
    _add_setting_options(set_parser)
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file.

    A missing default file yields the built-in defaults; a missing file named with
    ``--config`` is an error.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).name
    if args.config_file is None and not Path(CFG_FILE).exists():
        config = Config()
        ConfigLoader.validate(config)
    else:
        config = ConfigLoader(config_filename=args.config_file or CFG_FILE, script_name=script_name).config
    config.GENERAL.SCRIPT_NAME = script_name
    config.GENERAL.VERSION = VERSION
    if args.debug:
        config.GENERAL.DEBUG = True
    return config


def setup_logging(config: Config) -> None:
    log_file: str = str(FileUtils.resolve_path(config.GENERAL.LOG_FILE)) if config.GENERAL.LOG_FILE else ""
    logger_utils = LoggerUtils(log_file)
    logger_utils.set_level("DEBUG" if config.GENERAL.DEBUG else "INFO")


def print_output(output: ConversionOutput, to_langs: list[str]) -> None:
    for lang, text in zip(to_langs, (output.target1, output.target2), strict=True):
        print(SEPARATOR)
        print(LANGUAGE_TEMPLATES[lang].name)
        print(SEPARATOR)
        print(text)
        print()
    print(f"Status: {output.status}")


async def run_convert(converter: CodeConverter, args: argparse.Namespace) -> int:
    source_path: Path = FileUtils.resolve_path(args.source_file)
    source_code: str = FileUtils.read_source(source_path)

    from_lang: str | None = args.from_lang or FileUtils.detect_language(source_path)
    if from_lang is None:
        from_lang = converter.config.CONVERSION.SOURCE_LANGUAGE
        print(f"Unknown file extension '{source_path.suffix}'; assuming {LANGUAGE_TEMPLATES[from_lang].name}")
    to_langs: list[str] = list(args.to_langs or converter.config.CONVERSION.TARGET_LANGUAGES)

    # one-off overrides for this run; not persisted
    ConfigLoader.apply_overrides(converter.config, **vars(args))
    ConfigLoader.validate(converter.config)

    output: ConversionOutput | None = await converter.convert(source_code, from_lang, to_langs[0], to_langs[1])
    if output is None:
        print("A conversion is already in progress.", file=sys.stderr)
        return 1
    if not output.success:
        print(output.status, file=sys.stderr)
        return 1
    print_output(output, to_langs)
    return 0


async def run_status(converter: CodeConverter) -> int:
    status: ModelStatus = await converter.check_model_status()
    stats = converter.state.confidence.stats

    print(SEPARATOR)
    print(f"codeconvert {VERSION}")
    print(SEPARATOR)
    print(status.message)
    print(f"Model: {status.model}")
    if status.models:
        print("Installed models:")
        for info in status.models:
            print(f"  {info.label}")
    else:
        print(f"Suggested models: {', '.join(status.model_names)}")
    print("-" * 50)
    print(f"Mode: {converter.config.POLICY.MODE}")
    print(f"Confidence threshold: {converter.config.POLICY.CONFIDENCE_THRESHOLD:.0%}")
    print(f"Confidence: {stats.current_confidence:.0%}")
    print(f"Conversions: {stats.total_conversions}")
    print(f"Manual successes: {stats.manual_successes}")
    print(f"AI corrections: {stats.ai_corrections}")
    print(f"Learned patterns: {len(converter.state.patterns)}")
    print(f"History entries: {len(converter.state.history)}")
    return 0


def run_set(converter: CodeConverter, args: argparse.Namespace) -> int:
    changed: list[str] = []
    if args.mode is not None:
        converter.update_mode(args.mode)
        changed.append(f"mode={args.mode}")
    if args.threshold is not None:
        converter.update_confidence_threshold(args.threshold)
        changed.append(f"threshold={args.threshold}")
    if args.model is not None:
        converter.update_model(args.model)
        changed.append(f"model={args.model}")
    if args.url is not None:
        converter.update_base_url(args.url)
        changed.append(f"url={args.url}")

    if not changed:
        print("Nothing to change. Use --mode, --threshold, --model or --url.", file=sys.stderr)
        return 1
    print(f"Settings saved: {', '.join(changed)}")
    return 0


async def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Performs the following steps:
    1. Check Python version
    2. Parse command-line arguments
    3. Load configuration and set up logging
    4. Open the learning state and run the subcommand
    """
    check_python_version()
    args: argparse.Namespace = build_parser().parse_args(argv)

    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 2
    setup_logging(config)

    state_path: Path = FileUtils.resolve_path(config.GENERAL.STATE_FILE)
    try:
        async with CodeConverter(config, storage=StateStorage(state_path)) as converter:
            if args.command == "convert":
                return await run_convert(converter, args)
            if args.command == "status":
                return await run_status(converter)
            if args.command == "reset":
                print(converter.reset_learning_data())
                return 0
            return run_set(converter, args)
    except (ConfigLoaderError, ValueError) as err:
        print(f"\nError: {err}", file=sys.stderr)
        return 2
    except (FileUtilsError, StateStorageError) as err:
        print(f"\nError: {err}", file=sys.stderr)
        return 1


def cli() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nCancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (OSError, RuntimeError) as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli()
