"""
庫存文字解析模組

將商品頁面上庫存區塊的文字（例如 "5 in stock at Tustin Store"）
轉換為庫存數量。
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .config import DEFAULT_DEPLETED_MARKERS


# 解析狀態
STATUS_COUNTED = "counted"
STATUS_DEPLETED = "depleted"
STATUS_UNKNOWN = "unknown"

# 數量後綴，例如 "10+ in stock"
QUANTITY_SUFFIX = "+"


@dataclass(frozen=True)
class InventoryReading:
    """庫存文字解析結果"""
    count: int
    status: str


def read_inventory_text(
    text: Optional[str],
    depleted_markers: Iterable[str] = DEFAULT_DEPLETED_MARKERS,
) -> InventoryReading:
    """
    解析庫存文字並回報判定依據

    規則：
    1. 去除前後空白
    2. 若（不分大小寫）包含售完字樣，數量為 0，優先於任何數字
    3. 否則依序檢查以空白分隔的字詞，去除結尾的 "+"，
       回傳第一個純數字字詞的值
    4. 都不符合時數量為 0，狀態為 unknown

    Args:
        text: 庫存區塊文字
        depleted_markers: 售完字樣列表

    Returns:
        InventoryReading: 數量與判定狀態
    """
    normalized = (text or "").strip()
    lowered = normalized.lower()

    for marker in depleted_markers:
        marker = marker.strip().lower()
        if marker and marker in lowered:
            return InventoryReading(count=0, status=STATUS_DEPLETED)

    for token in normalized.split():
        token = token.rstrip(QUANTITY_SUFFIX)
        if token.isdecimal():
            return InventoryReading(count=int(token), status=STATUS_COUNTED)

    return InventoryReading(count=0, status=STATUS_UNKNOWN)


def extract_count(
    text: Optional[str],
    depleted_markers: Iterable[str] = DEFAULT_DEPLETED_MARKERS,
) -> int:
    """從庫存文字取得數量，無法判定時回傳 0"""
    return read_inventory_text(text, depleted_markers).count
