# ====================================================================================================
# Beth Yw? - Welsh Government statistics report runner
#
# What it takes in:
# - A data directory (`--dir`) holding the authority list (`areas.csv`) and the dataset files
# - Which datasets to import (`--datasets`) and optional area / measure / year filters
# - An optional YAML dataset table (`--config`) replacing the built-in one
#
# What it produces:
# - The merged statistics on stdout, either as aligned tables (default) or as JSON (`--json`)
# - Log messages on stderr (and in `--log-file` when given)
#
# Exit status:
# - 0 success, 1 invalid arguments, 2 a dataset could not be opened or imported
# ====================================================================================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.config import (
    DatasetConfig,
    InputFileSource,
    load_datasets_config,
    parse_areas_arg,
    parse_datasets_arg,
    parse_measures_arg,
    parse_years_arg,
)
from src.ingest import populate
from src.model import AreaCollection, InvalidArgumentError, MalformedSourceError
from src.report import render_json, render_table


EXIT_OK = 0
EXIT_BAD_ARGUMENT = 1
EXIT_IMPORT_FAILED = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bethyw",
        description="Parse official Welsh Government statistics data files.",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=Path("datasets"),
        help="Directory for input data passed in as files.",
    )
    parser.add_argument(
        "-d",
        "--datasets",
        action="append",
        help=(
            "The dataset(s) to import and analyse as a comma-separated list of codes "
            "(omit or set to 'all' to import and analyse all datasets)."
        ),
    )
    parser.add_argument(
        "-a",
        "--areas",
        action="append",
        help=(
            "The area(s) to import and analyse as a comma-separated list of authority codes "
            "(omit or set to 'all' to import and analyse all areas)."
        ),
    )
    parser.add_argument(
        "-m",
        "--measures",
        action="append",
        help=(
            "Select a subset of measures from the dataset(s) "
            "(omit or set to 'all' to import and analyse all measures)."
        ),
    )
    parser.add_argument(
        "-y",
        "--years",
        default="0",
        help="Focus on a particular year (YYYY) or inclusive range of years (YYYY-ZZZZ).",
    )
    parser.add_argument(
        "-j", "--json", action="store_true", help="Print the output as JSON instead of tables."
    )
    parser.add_argument("--config", type=Path, help="Optional YAML dataset table.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (stderr).",
    )
    parser.add_argument("--log-file", type=Path, help="Also write log messages to this file.")
    return parser.parse_args(argv)


def configure_logging(level: str, log_file: Optional[Path]) -> logging.Logger:
    # Configure the package loggers: stderr always (stdout carries the report), plus an optional file.
    logger = logging.getLogger("src")
    logger.setLevel(level)
    logger.handlers.clear()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger


def _import_source(
    areas: AreaCollection,
    data_dir: Path,
    source: InputFileSource,
    areas_filter: Set[str],
    measures_filter: Optional[Set[str]],
    years_filter: Optional[Tuple[int, int]],
) -> None:
    path = data_dir / source.file
    if not path.is_file():
        raise FileNotFoundError(f"Failed to open file {path}")
    # utf-8-sig: StatsWales exports may start with a byte order mark.
    with path.open("r", encoding="utf-8-sig", newline="") as stream:
        populate(
            areas,
            stream,
            source.parser,
            source.cols,
            areas_filter,
            measures_filter,
            years_filter,
        )


def load_areas(
    areas: AreaCollection, data_dir: Path, config: DatasetConfig, areas_filter: Set[str]
) -> None:
    _import_source(areas, data_dir, config.areas, areas_filter, None, None)


def load_datasets(
    areas: AreaCollection,
    data_dir: Path,
    datasets: List[InputFileSource],
    areas_filter: Set[str],
    measures_filter: Set[str],
    years_filter: Tuple[int, int],
) -> None:
    logger = logging.getLogger("src")
    for source in datasets:
        logger.info("Importing %s (%s) from %s", source.name, source.code, source.file)
        _import_source(areas, data_dir, source, areas_filter, measures_filter, years_filter)


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger = configure_logging(args.log_level, args.log_file)

    try:
        if args.config is not None and not args.config.is_file():
            raise InvalidArgumentError(f"Dataset config not found: {args.config}")
        config = load_datasets_config(args.config)
        datasets = parse_datasets_arg(args.datasets, config.datasets)
        areas_filter = parse_areas_arg(args.areas)
        measures_filter = parse_measures_arg(args.measures)
        years_filter = parse_years_arg(args.years)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return EXIT_BAD_ARGUMENT

    areas = AreaCollection()
    try:
        load_areas(areas, args.dir, config, areas_filter)
        load_datasets(areas, args.dir, datasets, areas_filter, measures_filter, years_filter)
    except (MalformedSourceError, OSError, UnicodeDecodeError) as exc:
        print("Error importing dataset:", file=sys.stderr)
        print(exc, file=sys.stderr)
        return EXIT_IMPORT_FAILED
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return EXIT_BAD_ARGUMENT

    logger.info("Imported %s areas", areas.size())
    if args.json:
        print(render_json(areas))
    else:
        print(render_table(areas))
    return EXIT_OK


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
