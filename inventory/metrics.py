"""
Prometheus 指標模組

定義庫存 gauge、成功/失敗 counter 與檢查耗時 histogram，
並提供 HTTP 指標端點的啟動函式。
"""

import logging
from typing import Optional, Tuple

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    REGISTRY,
    start_http_server,
)


logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "microcenter"
DEFAULT_METRICS_ADDR = ":9090"


class InventoryMetrics:
    """
    庫存監控指標

    每個實例在指定的 registry 上註冊一組指標；
    測試時請傳入獨立的 CollectorRegistry 以避免重複註冊。
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        self.registry = registry if registry is not None else REGISTRY

        self.inventory = Gauge(
            "product_inventory_count",
            "The current inventory count for a product at a specific store",
            ["store_id", "product_name", "product_url"],
            namespace=namespace,
            registry=self.registry,
        )
        self.scrape_duration = Histogram(
            "scrape_duration_seconds",
            "Duration of inventory scrape in seconds",
            ["product_url"],
            namespace=namespace,
            registry=self.registry,
        )
        self.scrape_success = Counter(
            "scrape_success",
            "Total number of successful scrapes",
            ["product_url"],
            namespace=namespace,
            registry=self.registry,
        )
        self.scrape_failure = Counter(
            "scrape_failure",
            "Total number of failed scrapes",
            ["product_url", "error"],
            namespace=namespace,
            registry=self.registry,
        )

    def set_inventory(self, store_id: str, product_name: str, product_url: str, count: int) -> None:
        self.inventory.labels(
            store_id=store_id,
            product_name=product_name,
            product_url=product_url,
        ).set(count)

    def record_success(self, product_url: str) -> None:
        self.scrape_success.labels(product_url=product_url).inc()

    def record_failure(self, product_url: str, error: str) -> None:
        self.scrape_failure.labels(product_url=product_url, error=error).inc()

    def observe_duration(self, product_url: str, seconds: float) -> None:
        self.scrape_duration.labels(product_url=product_url).observe(seconds)


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """
    解析監聽位址

    支援 "host:port" 與 ":port"（監聽所有介面）。

    Raises:
        ValueError: 位址格式錯誤時
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid metrics address: {addr!r} (expected host:port or :port)")
    return host or "0.0.0.0", int(port)


def start_metrics_server(
    addr: str = DEFAULT_METRICS_ADDR,
    registry: Optional[CollectorRegistry] = None,
) -> None:
    """在背景執行緒啟動 /metrics HTTP 端點"""
    host, port = parse_listen_addr(addr)
    start_http_server(port, addr=host, registry=registry if registry is not None else REGISTRY)
    logger.info(f"Metrics server listening on {host}:{port}")
