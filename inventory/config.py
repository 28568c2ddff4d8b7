"""
設定檔載入模組

從 JSON 設定檔載入門市代碼、檢查間隔、追蹤商品與瀏覽器設定，
並提供預設值填充與基本驗證。
"""

import copy
import json
import os
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


DEFAULT_CONFIG_PATH = os.path.join("config", "inventory.json")

DEFAULT_DEPLETED_MARKERS = ["out of stock", "sold out"]

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
]

# 預設值定義
DEFAULT_CONFIG = {
    "check_interval_minutes": 5,
    "depleted_markers": DEFAULT_DEPLETED_MARKERS,
    "products": [],
    "browser": {
        "headless": True,
        "timeout_seconds": 30,
        "inventory_selector": ".inventory-msg",
        "store_cookie_name": "storeSelected",
        "store_cookie_domain": ".microcenter.com",
        "user_agents": DEFAULT_USER_AGENTS,
    },
}


@dataclass(frozen=True)
class ProductSpec:
    """追蹤商品設定"""
    name: str
    url: str


@dataclass
class BrowserOptions:
    """瀏覽器設定"""
    headless: bool = True
    timeout_seconds: float = 30
    inventory_selector: str = ".inventory-msg"
    store_cookie_name: str = "storeSelected"
    store_cookie_domain: str = ".microcenter.com"
    user_agents: List[str] = field(default_factory=lambda: list(DEFAULT_USER_AGENTS))


@dataclass
class MonitorConfig:
    """監控設定"""
    store_id: str
    products: List[ProductSpec] = field(default_factory=list)
    check_interval_minutes: float = 5
    depleted_markers: List[str] = field(default_factory=lambda: list(DEFAULT_DEPLETED_MARKERS))
    browser: BrowserOptions = field(default_factory=BrowserOptions)

    def __post_init__(self):
        # 將 dict 轉換為對應的設定物件
        self.store_id = "" if self.store_id is None else str(self.store_id).strip()
        if not isinstance(self.products, (list, tuple)):
            raise ValueError("products must be a list")
        self.products = [
            p if isinstance(p, ProductSpec) else _build_product(p, index)
            for index, p in enumerate(self.products)
        ]
        if isinstance(self.browser, dict):
            self.browser = _build_browser_options(self.browser)
        elif not isinstance(self.browser, BrowserOptions):
            raise ValueError("browser must be an object")
        self.check_interval_minutes = _to_float(self.check_interval_minutes, "check_interval_minutes")
        self.browser.timeout_seconds = _to_float(self.browser.timeout_seconds, "browser.timeout_seconds")
        self.depleted_markers = [
            m.strip().lower()
            for m in _to_string_list(self.depleted_markers, "depleted_markers")
            if m.strip()
        ]
        self.validate()

    @property
    def check_interval_seconds(self) -> float:
        return self.check_interval_minutes * 60

    def validate(self) -> None:
        """
        驗證設定內容

        Raises:
            ValueError: 當任何欄位不合法時
        """
        if not self.store_id:
            raise ValueError("store_id is required")
        if self.check_interval_minutes <= 0:
            raise ValueError(
                f"check_interval_minutes must be positive, got {self.check_interval_minutes}"
            )
        if self.browser.timeout_seconds <= 0:
            raise ValueError(
                f"browser.timeout_seconds must be positive, got {self.browser.timeout_seconds}"
            )
        if not self.products:
            raise ValueError("products must contain at least one entry")

        seen_urls = set()
        for product in self.products:
            if product.url in seen_urls:
                raise ValueError(f"Duplicate product url: {product.url}")
            seen_urls.add(product.url)


def _to_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number, got {value!r}")


def _to_string_list(value: Any, field_name: str) -> List[str]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return list(value)


def _build_product(data: Any, index: int) -> ProductSpec:
    if not isinstance(data, dict):
        raise ValueError(f"products[{index}] must be an object")

    name = str(data.get("name") or "").strip()
    url = str(data.get("url") or "").strip()
    if not name:
        raise ValueError(f"products[{index}].name is required")
    if not url:
        raise ValueError(f"products[{index}].url is required")
    return ProductSpec(name=name, url=url)


def _build_browser_options(data: Dict[str, Any]) -> BrowserOptions:
    known = set(BrowserOptions.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown browser option(s): {sorted(unknown)}")
    options = BrowserOptions(**data)
    if not isinstance(options.headless, bool):
        raise ValueError(f"browser.headless must be true or false, got {options.headless!r}")
    for name in ("inventory_selector", "store_cookie_name", "store_cookie_domain"):
        value = getattr(options, name)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"browser.{name} must be a non-empty string")
    options.user_agents = _to_string_list(options.user_agents, "browser.user_agents")
    return options


def _merge_defaults(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """將設定檔內容合併至預設值（browser 區塊逐欄合併）"""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in config_data.items():
        if key == "browser" and isinstance(value, dict):
            merged["browser"].update(value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> MonitorConfig:
    """
    載入監控設定檔

    Args:
        config_path: 設定檔路徑，預設為 config/inventory.json

    Returns:
        MonitorConfig: 監控設定物件

    Raises:
        FileNotFoundError: 當設定檔不存在時
        ValueError: 當設定檔格式或內容不合法時
    """
    config_path = config_path or DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse config file {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    merged_config = _merge_defaults(config_data)

    if "store_id" not in merged_config:
        raise ValueError("store_id is required")

    unknown = set(merged_config) - set(MonitorConfig.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown config key(s): {sorted(unknown)}")

    return MonitorConfig(**merged_config)
