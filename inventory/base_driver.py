"""
頁面自動化基礎類別模組

定義庫存檢查所需的瀏覽器操作介面，包括：
- 抽象方法定義 (navigate, find_inventory_element, get_text)
- Playwright 瀏覽器初始化和關閉邏輯
- User-Agent 選擇
- 將 Playwright 例外轉換為對應的 DriverError
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from playwright.sync_api import (
    sync_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Locator,
    Page,
    Playwright,
)

from .config import BrowserOptions


logger = logging.getLogger(__name__)


class DriverError(Exception):
    """頁面自動化操作失敗"""


class NavigationError(DriverError):
    """無法載入頁面"""


class ElementNotFoundError(DriverError):
    """找不到庫存區塊或等待逾時"""


class TextExtractionError(DriverError):
    """無法讀取庫存區塊文字"""


class SessionError(DriverError):
    """無法建立瀏覽器 session（啟動時的致命錯誤）"""


class PageDriver(ABC):
    """
    頁面自動化介面

    同一個 driver 實例同時只能處理一個頁面操作，
    呼叫端需確保檢查依序執行。
    """

    @abstractmethod
    def start(self) -> None:
        """建立瀏覽器 session，失敗時拋出 SessionError"""

    @abstractmethod
    def close(self) -> None:
        """釋放瀏覽器資源"""

    @abstractmethod
    def navigate(self, url: str) -> None:
        """載入頁面，失敗時拋出 NavigationError"""

    @abstractmethod
    def find_inventory_element(self) -> Any:
        """取得庫存區塊，找不到時拋出 ElementNotFoundError"""

    @abstractmethod
    def get_text(self, element: Any) -> str:
        """讀取區塊文字，失敗時拋出 TextExtractionError"""

    def __enter__(self):
        """支援 context manager 用法"""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支援 context manager 用法"""
        self.close()
        return False


class PlaywrightDriver(PageDriver):
    """
    Playwright 實作的頁面自動化

    使用單一 Chromium 瀏覽器與單一頁面，所有檢查共用。
    子類別可覆寫 _prepare_context 在任何檢查開始前設定 session（例如門市 cookie）。
    """

    def __init__(self, options: Optional[BrowserOptions] = None):
        """
        初始化 driver（不啟動瀏覽器）

        Args:
            options: 瀏覽器設定，若為 None 則使用預設值
        """
        self.options = options or BrowserOptions()
        self.user_agents: List[str] = list(self.options.user_agents)

        # 瀏覽器相關實例（延遲初始化）
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

        self._current_user_agent: Optional[str] = None

    @property
    def page(self) -> Optional[Page]:
        """取得當前頁面實例"""
        return self._page

    @property
    def current_user_agent(self) -> Optional[str]:
        """本次 session 使用的 User-Agent，None 表示瀏覽器預設值"""
        return self._current_user_agent

    @property
    def timeout_ms(self) -> float:
        return self.options.timeout_seconds * 1000

    def _get_user_agent(self) -> Optional[str]:
        """隨機選擇一個 User-Agent，列表為空時使用瀏覽器預設值"""
        if not self.user_agents:
            return None
        self._current_user_agent = random.choice(self.user_agents)
        return self._current_user_agent

    def _prepare_context(self, context: BrowserContext) -> None:
        """在建立頁面前設定瀏覽器上下文，預設不做任何事"""

    def start(self) -> None:
        """
        初始化瀏覽器

        啟動 Playwright 和 Chromium 瀏覽器，建立瀏覽器上下文和頁面。

        Raises:
            SessionError: 無法啟動瀏覽器時
        """
        if self._page is not None:
            return

        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.options.headless)
            self._context = self._browser.new_context(user_agent=self._get_user_agent())
            self._context.set_default_timeout(self.timeout_ms)
            self._prepare_context(self._context)
            self._page = self._context.new_page()
        except PlaywrightError as e:
            self.close()
            raise SessionError(f"failed to start browser session: {e}") from e

        logger.info(
            f"Browser session started (headless={self.options.headless}, "
            f"user_agent={self._current_user_agent or 'default'})"
        )

    def close(self) -> None:
        """
        關閉瀏覽器

        依序關閉頁面、上下文、瀏覽器和 Playwright 實例。
        """
        for attr in ("_page", "_context", "_browser"):
            resource = getattr(self, attr)
            if resource is not None:
                try:
                    resource.close()
                except PlaywrightError as e:
                    logger.debug(f"Error closing {attr.lstrip('_')}: {e}")
                setattr(self, attr, None)

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                logger.debug(f"Error stopping playwright: {e}")
            self._playwright = None

    def _require_page(self) -> Page:
        if self._page is None:
            raise SessionError("browser session is not started")
        return self._page

    def navigate(self, url: str) -> None:
        page = self._require_page()
        try:
            page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"failed to load page: {e}") from e

    @property
    def inventory_selector(self) -> str:
        """庫存區塊的 CSS selector"""
        return self.options.inventory_selector

    def find_inventory_element(self) -> Locator:
        """
        等待庫存區塊出現

        以 locator 輪詢區塊是否可見，取代固定秒數的等待。
        """
        page = self._require_page()
        locator = page.locator(self.inventory_selector).first
        try:
            locator.wait_for(state="visible", timeout=self.timeout_ms)
        except PlaywrightError as e:
            raise ElementNotFoundError(
                f"failed to find inventory element {self.inventory_selector!r}: {e}"
            ) from e
        return locator

    def get_text(self, element: Locator) -> str:
        try:
            return element.inner_text(timeout=self.timeout_ms)
        except PlaywrightError as e:
            raise TextExtractionError(f"failed to get inventory text: {e}") from e
