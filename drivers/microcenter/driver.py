"""
Micro Center 頁面自動化模組

繼承 PlaywrightDriver，在瀏覽器上下文建立時寫入門市 cookie，
讓商品頁面顯示指定門市的庫存。
"""

import logging
from typing import Optional

from playwright.sync_api import BrowserContext

from inventory.base_driver import PlaywrightDriver
from inventory.config import BrowserOptions


logger = logging.getLogger(__name__)


class MicroCenterDriver(PlaywrightDriver):
    """
    Micro Center 商品頁 driver

    門市選擇透過 cookie（預設 storeSelected=<門市代碼>）完成，
    於任何檢查開始前套用一次。
    """

    def __init__(self, store_id: str, options: Optional[BrowserOptions] = None):
        """
        初始化 driver

        Args:
            store_id: 門市代碼
            options: 瀏覽器設定
        """
        super().__init__(options)
        self.store_id = str(store_id)

    def store_cookie(self) -> dict:
        """門市選擇 cookie"""
        return {
            "name": self.options.store_cookie_name,
            "value": self.store_id,
            "domain": self.options.store_cookie_domain,
            "path": "/",
        }

    def _prepare_context(self, context: BrowserContext) -> None:
        context.add_cookies([self.store_cookie()])
        logger.info(f"Store cookie set: {self.options.store_cookie_name}={self.store_id}")
