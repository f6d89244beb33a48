"""Command-line entry point that describes a data file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from forest_data.config import load_config, loader_config_from
from forest_data.data import LocalFileSystem, generate_dataset, load_data, read_lines
from forest_data.eval.reporting import write_dataset_report

DATASET_FILENAME = "dataset.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the dataset description of a CSV data file.")
    parser.add_argument(
        "--descriptor",
        required=True,
        help="Attribute descriptor, e.g. 'N,C,3 N,I,L' (N numerical, C categorical, L label, I ignored).",
    )
    parser.add_argument("--data", type=Path, required=True, help="Path to the comma-separated data file.")
    parser.add_argument(
        "--config",
        type=Path,
        required=False,
        help="Path to a YAML config overriding forest_data/config/default_config.yaml.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory where dataset.json and the report are written (defaults to report.output_dir).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    loader_config = loader_config_from(config)
    output_dir = args.output_dir or Path(config.get("report", {}).get("output_dir", "results"))

    rows = read_lines(args.data, LocalFileSystem(encoding=loader_config.encoding))
    dataset = generate_dataset(args.descriptor, rows, loader_config)
    data = load_data(dataset, rows, loader_config)

    output_dir.mkdir(parents=True, exist_ok=True)
    dataset_path = dataset.save(output_dir / DATASET_FILENAME)
    report_path = write_dataset_report(dataset, data, output_dir, rows_read=len(rows))
    print(f"Dataset written to: {dataset_path}")
    print(f"Report written to: {report_path}")


if __name__ == "__main__":
    main()
