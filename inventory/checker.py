"""
商品庫存檢查模組

透過頁面自動化 driver 載入商品頁、找出庫存區塊並解析數量，
將每次檢查的結果（成功或失敗）包裝為 CheckOutcome 回傳。
任何 driver 錯誤都不會拋出到呼叫端。
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable

from .base_driver import PageDriver
from .config import DEFAULT_DEPLETED_MARKERS, ProductSpec
from .models import CheckErrorKind, CheckOutcome
from .parser import STATUS_UNKNOWN, read_inventory_text


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryChecker:
    """
    單一商品庫存檢查

    driver 由呼叫端建立並擁有，所有檢查共用同一個 session，
    因此 check_product 必須依序呼叫。
    """

    def __init__(
        self,
        driver: PageDriver,
        depleted_markers: Iterable[str] = DEFAULT_DEPLETED_MARKERS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        初始化檢查器

        Args:
            driver: 頁面自動化 driver（需已啟動）
            depleted_markers: 售完字樣列表
            clock: 取得目前時間的函式，測試時可替換
        """
        self.driver = driver
        self.depleted_markers = list(depleted_markers)
        self.clock = clock

    def check_product(self, store_id: str, product: ProductSpec) -> CheckOutcome:
        """
        檢查單一商品的庫存

        步驟：載入頁面 → 找到庫存區塊 → 讀取文字 → 解析數量。
        每個步驟的失敗對應不同的錯誤類型。

        Args:
            store_id: 門市代碼
            product: 商品設定

        Returns:
            CheckOutcome: 檢查結果
        """
        checked_at = self.clock()

        def failed(kind: CheckErrorKind, error: Exception) -> CheckOutcome:
            logger.debug(f"Check of {product.url} failed at {kind.value}: {error}")
            return CheckOutcome.failure(
                store_id=store_id,
                product_name=product.name,
                product_url=product.url,
                checked_at=checked_at,
                kind=kind,
                message=str(error),
            )

        try:
            self.driver.navigate(product.url)
        except Exception as e:
            return failed(CheckErrorKind.NAVIGATION_FAILED, e)

        try:
            element = self.driver.find_inventory_element()
        except Exception as e:
            return failed(CheckErrorKind.ELEMENT_NOT_FOUND, e)

        try:
            raw_text = self.driver.get_text(element)
        except Exception as e:
            return failed(CheckErrorKind.TEXT_EXTRACTION_FAILED, e)

        raw_text = raw_text or ""
        reading = read_inventory_text(raw_text, self.depleted_markers)
        if reading.status == STATUS_UNKNOWN:
            logger.warning(
                f"Could not determine stock for {product.name} from text {raw_text!r}, reporting 0"
            )

        logger.debug(f"Parsed {raw_text!r} as {reading.count} ({reading.status})")
        return CheckOutcome.success(
            store_id=store_id,
            product_name=product.name,
            product_url=product.url,
            checked_at=checked_at,
            count=reading.count,
            raw_text=raw_text.strip(),
        )
