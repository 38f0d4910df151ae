"""
loctable - command line entry point.

    loctable scan content.yaml     # 1) scan & assign keys
    loctable export-csv            # 2) write the translator CSV
    loctable import-csv [file]     # 3) merge translations back in
    loctable export-json           # 4) write runtime JSON per language
    loctable show                  # print the table
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from loctable.config import Settings, get_settings
from loctable.config_loader import load_content_manifest
from loctable.core.errors import LocalizationError
from loctable.core.events import get_event_bus
from loctable.services.pipeline import LocalizationPipeline
from loctable.services.scanner import RecordingContentMutator
from loctable.storage import create_local_storage

logger = logging.getLogger("loctable")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loctable", description="Localization table manager")
    parser.add_argument("--data-dir", help="Directory holding the table, CSV and JSON files")
    parser.add_argument("--languages", help="Languages, e.g. 'en,ro,fr'")
    parser.add_argument("--source-language", help="Language captured from content")

    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Scan content and assign keys")
    scan.add_argument("manifest", type=Path, help="YAML content manifest")
    scan.add_argument("--no-scenes", action="store_true", help="Skip scene content")
    scan.add_argument("--no-prefabs", action="store_true", help="Skip prefab content")

    sub.add_parser("export-csv", help="Export the translator CSV")

    imp = sub.add_parser("import-csv", help="Import a translator CSV")
    imp.add_argument("path", nargs="?", type=Path, help="CSV file (defaults to the exported one)")

    sub.add_parser("export-json", help="Export one JSON file per language")
    sub.add_parser("show", help="Print the table")

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.languages:
        overrides["languages"] = args.languages
    if args.source_language:
        overrides["source_language"] = args.source_language
    if getattr(args, "no_scenes", False):
        overrides["include_scenes"] = False
    if getattr(args, "no_prefabs", False):
        overrides["include_prefabs"] = False
    return get_settings().model_copy(update=overrides)


async def run(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    storage = create_local_storage(settings.data_dir)
    pipeline = LocalizationPipeline(
        storage.content,
        settings=settings,
        event_bus=get_event_bus(),
        mutator=RecordingContentMutator(),
    )
    table = await pipeline.load_or_create_table()

    if args.command == "scan":
        items = load_content_manifest(args.manifest)
        report = await pipeline.scan_and_assign(items)
        print(f"Scan complete. Assigned {report.processed} items.")
        for failure in report.failures:
            print(f"  ✗ {failure.item.ref}: {failure.error}")
        return 1 if report.failures else 0

    if args.command == "export-csv":
        location = await pipeline.export_csv()
        print(f"CSV exported → {location}")
        return 0

    if args.command == "import-csv":
        if args.path is not None:
            report = await pipeline.import_csv(args.path.read_bytes(), source=str(args.path))
        else:
            report = await pipeline.import_csv()
        print(f"CSV import complete. Updated {report.touched} keys.")
        if report.skipped_rows:
            print(f"  • skipped {report.skipped_rows} rows without a key")
        return 0

    if args.command == "export-json":
        locations = await pipeline.export_json()
        for location in locations:
            print(f"  ✓ {location}")
        return 0

    if args.command == "show":
        print(",".join(["key", *table.languages]))
        for row in table.rows:
            print(" | ".join([row.key, *row.values]))
        print(f"({len(table)} keys)")
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    try:
        return asyncio.run(run(args))
    except (LocalizationError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
