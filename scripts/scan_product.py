#!/usr/bin/env python
"""Scan a barcode and create or restock the matching product.

Opens the camera, decodes one barcode, looks it up in the product catalog
and saves the product through a running inventory API. Scanning a barcode
that already exists adds one unit to its stock.

Usage:
    # Scan with the default camera
    python scripts/scan_product.py

    # Type the barcode instead of scanning
    python scripts/scan_product.py --barcode 4001234567890

    # Put the new product into a category and set the stock
    python scripts/scan_product.py --category getranke --quantity 6
"""

import argparse
import asyncio
import sys

from lager.config import settings
from lager.core.errors import LagerError, ResourceError
from lager.core.resolution import DraftSession, ProductResolutionWorkflow
from lager.infra.logging import setup_logging
from lager.scanner.opencv_backend import create_capture
from lager.services.inventory_client import InventoryApiClient
from lager.services.product_lookup import ProductLookupClient


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Scan a barcode and save the product to the inventory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--url",
        default=settings.inventory_api_url,
        help=f"Inventory API root (default: {settings.inventory_api_url})",
    )
    parser.add_argument(
        "--camera",
        type=int,
        default=settings.camera_index,
        help=f"Camera device index (default: {settings.camera_index})",
    )
    parser.add_argument(
        "--barcode",
        default=None,
        help="Use this barcode instead of scanning",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Product name (overrides the catalog name)",
    )
    parser.add_argument(
        "--quantity",
        type=int,
        default=None,
        help="Stock for a new product (default: 1)",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Category slug for a new product",
    )

    return parser.parse_args()


async def open_session(
    workflow: ProductResolutionWorkflow,
    api: InventoryApiClient,
    barcode: str,
) -> DraftSession:
    """Edit the product with this barcode, or start a new one."""
    existing = await api.get_product_by_barcode(barcode)
    if existing is not None:
        print(f"Known product: {existing.name} (stock {existing.quantity})")
        session = await workflow.begin_edit(existing.id)
        return workflow.increment_quantity(session)

    session = workflow.begin_create(barcode)
    await workflow.wait_for_lookup(session)
    if session.notice:
        print(session.notice)
    return session


async def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging()

    barcode = args.barcode
    if not barcode:
        print("Scanning... (Ctrl+C to cancel)")
        try:
            barcode = await create_capture(args.camera).scan()
        except ResourceError as e:
            print(f"Error: {e.message}")
            return 2
    print(f"Barcode: {barcode}")

    api = InventoryApiClient(base_url=args.url)
    lookup = ProductLookupClient()
    workflow = ProductResolutionWorkflow(api, lookup)

    try:
        session = await open_session(workflow, api, barcode)

        if args.name:
            workflow.set_name(session, args.name)
        if args.quantity is not None and session.product_id is None:
            workflow.set_quantity(session, args.quantity)
        if args.category and session.product_id is None:
            categories = {c.slug: c.id for c in await api.list_categories()}
            if args.category not in categories:
                print(f"Error: unknown category '{args.category}'")
                return 1
            workflow.set_category(session, categories[args.category])

        result = await workflow.submit(session)
        print(f"{result.message}: {result.product.name} (stock {result.product.quantity})")
        return 0

    except LagerError as e:
        print(f"Error: {e.message}")
        return 1

    finally:
        await workflow.aclose()
        await lookup.close()
        await api.close()


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)
