#!/usr/bin/env python3
"""
單一商品檢查腳本

用於開發時手動確認 selector 與庫存文字解析是否正確，
檢查一次後輸出原始文字與解析結果。
"""
import argparse
import logging
import os
import sys
from dotenv import load_dotenv

from drivers.microcenter.driver import MicroCenterDriver
from inventory.base_driver import SessionError
from inventory.checker import InventoryChecker
from inventory.config import BrowserOptions, ProductSpec

# 載入 .env 檔案
load_dotenv()


def main() -> int:
    parser = argparse.ArgumentParser(description="Check inventory for a single product page")
    parser.add_argument("--url", required=True, help="Product URL to check")
    parser.add_argument("--name", default="Test Product", help="Product name")
    parser.add_argument("--store", default=os.getenv("STORE_ID", "191"), help="Store ID")
    parser.add_argument("--headed", action="store_true", help="Run the browser with a visible window")
    parser.add_argument("--timeout", type=float, default=30, help="Browser timeout in seconds")
    parser.add_argument("--selector", default=None, help="Override the inventory element selector")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    options = BrowserOptions(headless=not args.headed, timeout_seconds=args.timeout)
    if args.selector:
        options.inventory_selector = args.selector

    product = ProductSpec(name=args.name, url=args.url)

    print(f"Checking inventory for {product.name} at store {args.store}...")
    try:
        with MicroCenterDriver(args.store, options) as driver:
            outcome = InventoryChecker(driver).check_product(args.store, product)
    except SessionError as e:
        print(f"Error: {e}")
        return 1

    print("\nResults:")
    print("-" * 35)

    if outcome.error is not None:
        print(f"Error: {outcome.error}")
        return 1

    print(f"Product: {outcome.product_name}")
    print(f"Store ID: {outcome.store_id}")
    print(f"Raw Text: {outcome.raw_text}")
    print(f"Parsed Count: {outcome.count}")
    print(f"Checked At: {outcome.checked_at.isoformat()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
