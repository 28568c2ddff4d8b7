"""
結果處理模組

將檢查結果轉換為 Prometheus 指標：
- 成功：設定庫存 gauge、成功 counter +1、記錄耗時
- 失敗：失敗 counter +1、記錄耗時，不更新 gauge

指標寫入失敗只記錄 log，不會中斷處理。
"""

import logging
import queue
from datetime import datetime, timezone
from typing import Callable, Optional

from .metrics import InventoryMetrics
from .models import CheckOutcome


logger = logging.getLogger(__name__)

# 結果佇列的結束標記
CLOSED = None

DEFAULT_QUEUE_SIZE = 10


def new_outcome_queue(maxsize: int = DEFAULT_QUEUE_SIZE) -> "queue.Queue":
    """建立有上限的結果佇列，滿時生產端會等待"""
    return queue.Queue(maxsize=maxsize)


class ResultPipeline:
    """檢查結果處理器（無狀態）"""

    def __init__(self, metrics: InventoryMetrics):
        self.metrics = metrics

    def _emit(self, description: str, emit: Callable[[], None]) -> bool:
        try:
            emit()
            return True
        except Exception as e:
            logger.warning(f"Failed to emit {description}: {e}")
            return False

    def process(self, outcome: CheckOutcome, now: Optional[datetime] = None) -> None:
        """
        處理單一檢查結果

        Args:
            outcome: 檢查結果
            now: 目前時間，預設為 datetime.now(timezone.utc)；
                 耗時為 now 與 outcome.checked_at 的差距（含佇列等待時間）
        """
        if now is None:
            now = datetime.now(timezone.utc)
        duration = max((now - outcome.checked_at).total_seconds(), 0.0)
        url = outcome.product_url

        if outcome.error is not None:
            logger.error(f"Error checking inventory for {outcome.product_name}: {outcome.error}")
            self._emit(
                "failure counter",
                lambda: self.metrics.record_failure(url, outcome.error.kind.value),
            )
            self._emit("duration", lambda: self.metrics.observe_duration(url, duration))
            return

        self._emit(
            "inventory gauge",
            lambda: self.metrics.set_inventory(
                outcome.store_id, outcome.product_name, url, outcome.count
            ),
        )
        self._emit("success counter", lambda: self.metrics.record_success(url))
        self._emit("duration", lambda: self.metrics.observe_duration(url, duration))

        logger.info(
            f"Product: {outcome.product_name}, Store: {outcome.store_id}, "
            f"Inventory: {outcome.count} ({duration:.2f}s)"
        )

    def drain(self, outcomes: "queue.Queue") -> int:
        """
        依序處理佇列中的結果，直到收到 CLOSED

        Args:
            outcomes: 結果佇列

        Returns:
            int: 處理的結果數量
        """
        processed = 0
        while True:
            outcome = outcomes.get()
            try:
                if outcome is CLOSED:
                    break
                try:
                    self.process(outcome)
                except Exception:
                    logger.exception(
                        f"Failed to process outcome for {getattr(outcome, 'product_url', outcome)!r}"
                    )
                processed += 1
            finally:
                outcomes.task_done()

        logger.info(f"Result pipeline closed after {processed} outcomes")
        return processed
