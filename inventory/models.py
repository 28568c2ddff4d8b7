"""
檢查結果資料模型

定義單次商品庫存檢查的結果與錯誤分類。
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class CheckErrorKind(str, Enum):
    """檢查失敗的類型"""

    NAVIGATION_FAILED = "NavigationFailed"
    ELEMENT_NOT_FOUND = "ElementNotFound"
    TEXT_EXTRACTION_FAILED = "TextExtractionFailed"


@dataclass(frozen=True)
class CheckError:
    """檢查失敗原因"""

    kind: CheckErrorKind
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value


@dataclass(frozen=True)
class CheckOutcome:
    """
    單次檢查結果

    成功時 error 為 None 且 count 為庫存數量；
    失敗時 error 帶有原因，count 固定為 0，不可寫入庫存 gauge。
    checked_at 為檢查開始時間（UTC）。
    """

    store_id: str
    product_name: str
    product_url: str
    checked_at: datetime
    count: int = 0
    raw_text: str = ""
    error: Optional[CheckError] = None

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.error is not None and self.count != 0:
            raise ValueError("failed outcome must not carry a count")

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        store_id: str,
        product_name: str,
        product_url: str,
        checked_at: datetime,
        count: int,
        raw_text: str = "",
    ) -> "CheckOutcome":
        return cls(
            store_id=store_id,
            product_name=product_name,
            product_url=product_url,
            checked_at=checked_at,
            count=count,
            raw_text=raw_text,
        )

    @classmethod
    def failure(
        cls,
        store_id: str,
        product_name: str,
        product_url: str,
        checked_at: datetime,
        kind: CheckErrorKind,
        message: str = "",
    ) -> "CheckOutcome":
        return cls(
            store_id=store_id,
            product_name=product_name,
            product_url=product_url,
            checked_at=checked_at,
            error=CheckError(kind=kind, message=message),
        )
