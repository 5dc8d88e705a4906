"""
Handles command-line argument parsing and initiates the conversion.
This is the entry point for the console script.
"""
import argparse
import logging
import sys
from pathlib import Path

from .core.batch_processor import BatchProcessor
from .core.pipeline import ConversionPipeline
from .utils.config import BatchConfig, ClassNameOptions, ConversionConfig, FormatterOptions
from .utils.logger import LOGGER_NAME, setup_main_logger


# Get logger (will be configured in run_cli)
log = logging.getLogger(LOGGER_NAME)

HTML_PATTERNS = ("**/*.html", "**/*.htm")
STDIN_MARKER = "-"


def int_in_range(min_val, max_val):
    """Checks if value is an int in [min_val, max_val] range."""
    def checker(value):
        ivalue = int(value)
        if not (min_val <= ivalue <= max_val):
            raise argparse.ArgumentTypeError(f"Value must be between {min_val} and {max_val}, got {ivalue}")
        return ivalue
    return checker


def single_char(value):
    """Checks if value is exactly one character."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"Value must be a single character, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twcss-to-sass",
        description="Converts HTML with utility classes and inline styles to nested SCSS.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input_paths", nargs="+",
                        help="Input .html files or/and folders separated by a space. Use '-' to read from stdin.")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output folder or filename (for single input). If omitted, each output is placed next to the input file.")
    parser.add_argument("--no-format", action="store_true", help="Print raw, unformatted SCSS.")
    parser.add_argument("--use-comments", action="store_true",
                        help="Use the HTML comments before an element as its class name.")
    parser.add_argument("--max-length", type=int_in_range(1, 255), default=50,
                        help="Maximum length of class names generated from comments.")
    parser.add_argument("--no-comments", action="store_true",
                        help="Don't print descriptive comments before selectors.")
    parser.add_argument("--prefix", default="", help="Prefix for class names generated from comments.")
    parser.add_argument("--suffix", default="", help="Suffix for class names generated from comments.")
    parser.add_argument("--replace-with", type=single_char, default="-",
                        help="Separator used when slugifying comments.")
    parser.add_argument("--keep-case", action="store_true", help="Don't lowercase class names generated from comments.")
    parser.add_argument("--indent-size", type=int_in_range(0, 16), default=4, help="Indentation width of the output.")
    parser.add_argument("--threads", type=int, default="0",
                        help="Number of parallel workers to use for conversion. 0 to use max.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show info messages on the console.")
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    """Builds the conversion settings from parsed arguments."""
    return ConversionConfig(
        format_output=not args.no_format,
        use_comment_blocks_as_class_name=args.use_comments,
        max_class_name_length=args.max_length,
        print_comments=not args.no_comments,
        formatter_options=FormatterOptions(indent_size=args.indent_size),
        class_name_options=ClassNameOptions(
            lowercase=not args.keep_case,
            replace_with=args.replace_with,
            prefix=args.prefix,
            suffix=args.suffix,
        ),
    )


def collect_files(input_paths: list[str]) -> list[Path]:
    """
    Expands folders into the .html files they contain; skips missing paths.
    Each file is returned once, at its first position.
    """
    files_to_process = []
    for raw_path in input_paths:
        path = Path(raw_path)
        if not path.exists():
            log.warning(f"Input path does not exist, skipping: {path}")
            continue
        if path.is_dir():
            for pattern in HTML_PATTERNS:
                files_to_process.extend(sorted(path.glob(pattern)))
        elif path.is_file() and path.suffix.lower() in ('.html', '.htm'):
            files_to_process.append(path)
        else:
            log.warning(f"Not an HTML file, skipping: {path}")

    # a file named directly and found again through its folder is converted once
    unique = {}
    for path in files_to_process:
        unique.setdefault(path.resolve(), path)
    return list(unique.values())


def run_cli(argv: list[str] | None = None) -> int:
    """
    The main function for the command-line interface.
    Parses arguments and runs the conversion pipeline.
    Returns the process exit code.
    """
    args = build_parser().parse_args(argv)

    console_level = logging.INFO if args.verbose else logging.ERROR
    setup_main_logger(console_level)

    conversion_config = config_from_args(args)

    # stdin in, stdout out
    if args.input_paths == [STDIN_MARKER]:
        result = ConversionPipeline(conversion_config).convert(sys.stdin.read())
        if result is None:
            log.warning("No stylesheet produced from stdin.")
            return 1
        print(result)
        return 0

    files_to_process = collect_files(args.input_paths)
    if not files_to_process:
        log.warning("No .html files found to process.")
        return 1

    config = BatchConfig(
        output_path=args.output,
        num_threads=args.threads,
        conversion=conversion_config,
    )
    processor = BatchProcessor(config)

    num_files = len(files_to_process)
    log.info(f"Found {num_files} files. Starting conversion...")

    failed = 0
    completed_count = 0
    def progress_callback(path: Path, result: Path | None, exc: Exception | None):
        nonlocal completed_count, failed
        completed_count += 1
        # pad completed_count with spaces for alignment
        completed_str = str(completed_count).rjust(len(str(num_files)))
        prefix = f"[{completed_str}/{num_files}]"
        if exc:
            failed += 1
            print(f"{prefix} Error: {path.name}", flush=True)
            print(f"  └─ {exc}", flush=True)
            # file log already has the full trace from the worker
            log.error(f"Failed to convert {path.name}: {exc}", exc_info=False)
        elif result is None:
            print(f"{prefix} Skipped (no styles): {path.name}", flush=True)
        else:
            print(f"{prefix} Done: {path.name} -> {result}", flush=True)

    processor.run(files_to_process, progress_callback)

    print("\nBatch conversion finished.")
    return 1 if failed else 0
