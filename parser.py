"""
Sheet record parser — CLI entry point.

Usage:
    python parser.py <excel_file> --model <module:Class> [--sheet <sheet_name>]
                     [--output <output.json>] [--name-style snake|pascal|strip|none]

Loads an Excel workbook, maps the header row of one worksheet onto the
fields of a record class, binds every non-blank data row to an instance
of it and writes the records as a single JSON file.

If --sheet is not provided, the first worksheet is used.
"""

from __future__ import annotations

import argparse
import dataclasses
import importlib
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from dto.output import SheetRecords
from mapping import constants
from mapping.errors import SheetParserError
from mapping.factory import create_default_parser
from reader.workbook import Source

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_records(
    record_type: Type[T],
    source: Source,
    sheet_name: Optional[str] = None,
    name_style: Optional[str] = None,
) -> List[T]:
    """
    Parse one worksheet of *source* into ``record_type`` instances using the
    stock interceptors (see ``mapping.factory.create_default_parser``).
    """
    parser = create_default_parser(name_style=name_style)
    return parser.parse(record_type, source, sheet_name=sheet_name)


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------


def load_record_type(target: str) -> type:
    """Import ``"package.module:ClassName"`` and return the class."""
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise ValueError(f"Expected <module>:<Class>, got {target!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, class_name)
    except AttributeError:
        raise ValueError(f"Module {module_name!r} has no attribute {class_name!r}") from None


def _record_to_dict(record: Any) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    if dataclasses.is_dataclass(record):
        return dataclasses.asdict(record)
    return {k: v for k, v in vars(record).items() if not k.startswith("_")}


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Parse a worksheet into typed records and write them as JSON.",
    )
    parser.add_argument(
        "excel_file",
        help="Path to the .xlsx file to parse",
    )
    parser.add_argument(
        "-m",
        "--model",
        required=True,
        help="Record class as <module>:<Class>, e.g. myapp.models:Person",
    )
    parser.add_argument(
        "-s",
        "--sheet",
        default=None,
        help="Name of the worksheet to parse (default: first sheet)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: <input_name>_records.json)",
    )
    parser.add_argument(
        "--name-style",
        choices=["snake", "pascal", "strip", "none"],
        default=None,
        help=f"Header-to-field naming (default: {constants.NAME_STYLE})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=constants.LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    excel_path = args.excel_file
    if not os.path.isfile(excel_path):
        logger.error("File not found: %s", excel_path)
        return 1

    # Determine output path
    if args.output:
        output_path = args.output
    else:
        stem = Path(excel_path).stem
        output_path = f"{stem}_records.json"

    try:
        record_type = load_record_type(args.model)
    except (ImportError, ValueError) as exc:
        logger.error("Cannot load record type %s: %s", args.model, exc)
        return 1

    try:
        records = parse_records(
            record_type,
            excel_path,
            sheet_name=args.sheet,
            name_style=args.name_style,
        )
    except SheetParserError as exc:
        logger.error("%s", exc)
        return 2

    result = SheetRecords(
        file_name=Path(excel_path).name,
        sheet_name=args.sheet,
        record_type=record_type.__name__,
        records=[_record_to_dict(r) for r in records],
    )
    json_str = result.model_dump_json(indent=2)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(json_str)

    logger.info("Output written to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
