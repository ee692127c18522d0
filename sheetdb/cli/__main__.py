from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheetdb.config.loader import ConfigError, ConvertConfig, apply_env_overrides, load_config
from sheetdb.db.preview import read_table
from sheetdb.errors import ConversionError, RowInsertError
from sheetdb.logging.error_log import ErrorLogBuffer
from sheetdb.logging.init import log_summary, set_debug, setup_logging
from sheetdb.models.error_record import ErrorRecord
from sheetdb.services.orchestrator import convert_sheet
from sheetdb.services.progress import ConsoleProgress
from sheetdb.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load ``.env`` and the optional config file
- Run the conversion with a console progress sink
- Print a SUMMARY line (or an ERROR line plus a JSON Lines error record)
- Optionally print the first rows of the new table
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
DEFAULT_INSPECT_ROWS = 5


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv; variables already set in the process win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {n}")
    return n


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheetdb",
        description="Convert a public Google Sheet into a SQLite database",
        epilog="example: sheetdb https://docs.google.com/spreadsheets/d/xxx/edit output.db",
    )
    p.add_argument("source", help="Google Sheet URL or sheet ID")
    p.add_argument("destination", help="Output SQLite file (replaced if it exists)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/convert.yml if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect",
        nargs="?",
        type=_non_negative_int,
        const=DEFAULT_INSPECT_ROWS,
        default=None,
        metavar="N",
        help=f"Print the first N converted rows (default {DEFAULT_INSPECT_ROWS})",
    )
    return p.parse_args(argv)


def _load_settings(config_path: Path | None) -> ConvertConfig:
    if config_path is not None:
        cfg = load_config(config_path, required=True)
    else:
        cfg = load_config(None, required=False)
    return apply_env_overrides(cfg)


def _record_failure(args: argparse.Namespace, cfg: ConvertConfig, error: ConversionError) -> Path | None:
    row = -1
    if isinstance(error, RowInsertError) and error.row_number is not None:
        row = error.row_number
    buffer = ErrorLogBuffer(Path(cfg.logs_directory))
    buffer.append(
        ErrorRecord.create(
            source=args.source,
            destination=args.destination,
            row=row,
            error_type=error.error_type,
            message=f"{error.operation}: {error}",
        )
    )
    return buffer.flush()


def _inspect(destination: str, table_name: str, limit: int) -> None:
    df = read_table(destination, table_name, limit=limit)
    print(f"TABLE: {table_name} cols={list(df.columns)}")
    if df.empty:
        print("  (no rows)")
    else:
        print(df.to_string(index=False))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときだけ sys.argv を読む (テストからの main([...]) 呼び出しと区別)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = _load_settings(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FAILURE

    try:
        with ConsoleProgress(logger) as progress:
            result = convert_sheet(args.source, args.destination, progress, config=cfg)
    except ConversionError as e:
        logger.error(f"{e.operation}: {e}")
        try:
            log_path = _record_failure(args, cfg, e)
        except OSError as log_e:
            logger.warning(f"failed to write error log: {log_e}")
        else:
            if log_path is not None:
                logger.info(f"error details written to {log_path}")
        return EXIT_FAILURE

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if args.inspect is not None:
        _inspect(args.destination, result.table_name, args.inspect)

    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
