#!/usr/bin/env python
"""Export the inventory to a JSON file or import one.

Import replaces ALL categories and products on the server.

Usage:
    # Export to lager-export-<today>.json
    python scripts/transfer_inventory.py export

    # Export to a specific file
    python scripts/transfer_inventory.py export --output backup.json

    # Replace the inventory with a file's contents
    python scripts/transfer_inventory.py import backup.json
"""

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from lager.config import settings
from lager.core.errors import LagerError
from lager.core.messages import t
from lager.infra.logging import setup_logging
from lager.schemas.transfer import ImportPayload
from lager.services.inventory_client import InventoryApiClient


def default_export_path() -> Path:
    return Path(f"lager-export-{date.today().isoformat()}.json")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Export or import the inventory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--url",
        default=settings.inventory_api_url,
        help=f"Inventory API root (default: {settings.inventory_api_url})",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    export_cmd = commands.add_parser("export", help="Write the inventory to a JSON file")
    export_cmd.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Target file (default: lager-export-YYYY-MM-DD.json)",
    )

    import_cmd = commands.add_parser("import", help="Replace the inventory from a JSON file")
    import_cmd.add_argument("file", type=Path, help="Export file to import")

    return parser.parse_args()


async def run_export(api: InventoryApiClient, output: Path) -> int:
    snapshot = await api.export_data()
    output.write_text(
        json.dumps(snapshot.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    print(
        f"{t('exportSuccess')}: {output} "
        f"({len(snapshot.categories)} categories, {len(snapshot.products)} products)"
    )
    return 0


async def run_import(api: InventoryApiClient, source: Path) -> int:
    if not source.exists():
        print(f"Error: file not found: {source}")
        return 1

    try:
        payload = ImportPayload.model_validate_json(source.read_text(encoding="utf-8"))
    except PydanticValidationError as e:
        print(f"{t('importError')}: {e.errors()[0]['msg']}")
        return 1

    print(await api.import_data(payload))
    return 0


async def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging()

    api = InventoryApiClient(base_url=args.url)
    try:
        if args.command == "export":
            return await run_export(api, args.output or default_export_path())
        return await run_import(api, args.file)
    except LagerError as e:
        print(f"{t('error')}: {e.message}")
        return 1
    finally:
        await api.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
