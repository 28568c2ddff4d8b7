"""
排程模組

以固定間隔重複檢查所有追蹤商品：啟動時立即執行一輪，
之後每個間隔執行一輪，直到收到停止訊號。
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, List, Optional

from .checker import InventoryChecker
from .config import ProductSpec
from .models import CheckOutcome


logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


def next_deadline(previous: float, interval: float, now: float) -> float:
    """
    計算下一次執行時間

    間隔固定對齊於 previous + k * interval；
    若一輪檢查執行超過多個間隔，錯過的時間點合併為一次。

    Args:
        previous: 上一個排定時間點
        interval: 間隔秒數
        now: 目前時間

    Returns:
        float: 下一個排定時間點（若已錯過則為最近一個已到期的時間點）
    """
    deadline = previous + interval
    if deadline > now:
        return deadline
    missed = int((now - deadline) // interval)
    return deadline + missed * interval


class Scheduler:
    """
    庫存檢查排程器

    同一時間最多只執行一輪檢查，且同一輪內的商品依設定順序逐一檢查，
    因為所有檢查共用同一個瀏覽器 session。
    """

    def __init__(
        self,
        checker: InventoryChecker,
        products: List[ProductSpec],
        store_id: str,
        interval_seconds: float,
        on_outcome: Callable[[CheckOutcome], None],
        stop_event: Optional[threading.Event] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        初始化排程器

        Args:
            checker: 商品庫存檢查器
            products: 追蹤商品列表（依此順序檢查）
            store_id: 門市代碼
            interval_seconds: 檢查間隔秒數
            on_outcome: 每個檢查結果完成時呼叫（例如放入結果佇列）
            stop_event: 停止訊號，若為 None 則建立新的 Event
            clock: 單調時鐘，測試時可替換
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.checker = checker
        self.products = list(products)
        self.store_id = store_id
        self.interval_seconds = interval_seconds
        self.on_outcome = on_outcome
        self.stop_event = stop_event or threading.Event()
        self.clock = clock

        self.state = SchedulerState.STOPPED
        self.passes_completed = 0

    def stop(self) -> None:
        """送出停止訊號"""
        self.stop_event.set()

    def run_pass(self) -> int:
        """
        執行一輪檢查

        每個商品的結果在完成後立即交給 on_outcome。
        停止訊號只在商品與商品之間檢查，進行中的檢查會執行完畢。

        Returns:
            int: 本輪產生的結果數量
        """
        started = self.clock()
        produced = 0

        for product in self.products:
            if self.stop_event.is_set():
                logger.info(
                    f"Pass interrupted by stop signal after {produced}/{len(self.products)} products"
                )
                return produced
            outcome = self.checker.check_product(self.store_id, product)
            self.on_outcome(outcome)
            produced += 1

        self.passes_completed += 1
        logger.info(
            f"Pass {self.passes_completed} finished: {produced} products "
            f"in {self.clock() - started:.1f}s"
        )
        return produced

    def run(self) -> None:
        """
        持續執行檢查直到收到停止訊號

        啟動時立即執行第一輪，之後等待下一個時間點或停止訊號（以先發生者為準）。
        """
        self.state = SchedulerState.RUNNING
        logger.info(
            f"Inventory checker starting: {len(self.products)} products, "
            f"store {self.store_id}, every {self.interval_seconds:g}s"
        )

        deadline = self.clock()
        try:
            self.run_pass()
            while not self.stop_event.is_set():
                deadline = next_deadline(deadline, self.interval_seconds, self.clock())
                remaining = deadline - self.clock()
                if remaining > 0 and self.stop_event.wait(remaining):
                    break
                if self.stop_event.is_set():
                    break
                self.run_pass()
        finally:
            self.state = SchedulerState.STOPPED

        logger.info("Inventory checker stopping due to stop signal")
