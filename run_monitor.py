#!/usr/bin/env python3
"""
庫存監控主程式

定期檢查設定檔中的所有商品庫存，並透過 /metrics 端點提供 Prometheus 指標。
收到 SIGINT / SIGTERM 時停止排程、處理完剩餘結果後結束。
"""
import argparse
import logging
import os
import signal
import sys
import threading
from typing import Optional
from dotenv import load_dotenv
from prometheus_client import CollectorRegistry

from drivers.microcenter.driver import MicroCenterDriver
from inventory.checker import InventoryChecker
from inventory.config import DEFAULT_CONFIG_PATH, MonitorConfig, load_config
from inventory.base_driver import SessionError
from inventory.metrics import DEFAULT_METRICS_ADDR, InventoryMetrics, start_metrics_server
from inventory.pipeline import CLOSED, ResultPipeline, new_outcome_queue
from inventory.scheduler import Scheduler

# 載入 .env 檔案
load_dotenv()

logger = logging.getLogger("run_monitor")


def setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def install_signal_handlers(stop_event: threading.Event) -> None:
    """SIGINT / SIGTERM 時設定停止訊號"""
    def handle(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGINT, handle)
    signal.signal(signal.SIGTERM, handle)


def run_monitor(
    config: MonitorConfig,
    metrics_addr: str,
    stop_event: threading.Event,
    registry: Optional[CollectorRegistry] = None,
) -> int:
    """
    執行監控直到收到停止訊號

    Args:
        config: 監控設定
        metrics_addr: 指標端點監聽位址
        stop_event: 停止訊號
        registry: Prometheus registry，預設為全域 REGISTRY

    Returns:
        int: 結束代碼
    """
    metrics = InventoryMetrics(registry=registry)
    try:
        start_metrics_server(metrics_addr, registry=registry)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to start metrics server on {metrics_addr}: {e}")
        return 1

    driver = MicroCenterDriver(config.store_id, config.browser)
    try:
        driver.start()
    except SessionError as e:
        logger.error(f"Failed to create inventory checker: {e}")
        return 1

    outcomes = new_outcome_queue()
    pipeline = ResultPipeline(metrics)
    pipeline_thread = threading.Thread(
        target=pipeline.drain, args=(outcomes,), name="result-pipeline", daemon=True
    )
    pipeline_thread.start()

    scheduler = Scheduler(
        checker=InventoryChecker(driver, config.depleted_markers),
        products=config.products,
        store_id=config.store_id,
        interval_seconds=config.check_interval_seconds,
        on_outcome=outcomes.put,
        stop_event=stop_event,
    )

    try:
        scheduler.run()
    finally:
        outcomes.put(CLOSED)
        pipeline_thread.join()
        driver.close()

    logger.info("Shutdown complete")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Store inventory monitor with Prometheus metrics")
    parser.add_argument(
        "--config",
        default=os.getenv("INVENTORY_CONFIG", DEFAULT_CONFIG_PATH),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--metrics-addr",
        default=os.getenv("METRICS_ADDR", DEFAULT_METRICS_ADDR),
        help="Address to expose metrics on (host:port or :port)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Run the browser with a visible window",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    if args.headed:
        config.browser.headless = False

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    return run_monitor(config, args.metrics_addr, stop_event)


if __name__ == "__main__":
    sys.exit(main())
