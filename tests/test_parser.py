#!/usr/bin/env python3
"""
測試庫存文字解析

測試：
- 實際頁面上出現過的庫存文字
- 售完字樣優先於數字
- 無法判定時回傳 0 並標記為 unknown
"""
import unittest

from inventory.parser import (
    extract_count,
    read_inventory_text,
    STATUS_COUNTED,
    STATUS_DEPLETED,
    STATUS_UNKNOWN,
)


class TestExtractCount(unittest.TestCase):
    """庫存數量解析測試"""

    def test_count_at_start(self):
        """測試數量在開頭"""
        self.assertEqual(extract_count("5 in stock at Tustin Store"), 5)

    def test_count_at_end(self):
        """測試數量在結尾"""
        self.assertEqual(extract_count("In Stock at Tustin Store: 3"), 3)

    def test_out_of_stock(self):
        """測試售完"""
        self.assertEqual(extract_count("Out of Stock at Tustin Store"), 0)

    def test_plus_suffix(self):
        """測試帶 + 後綴的數量"""
        self.assertEqual(extract_count("10+ in stock"), 10)

    def test_limited_stock_without_number(self):
        """測試沒有數字也沒有售完字樣"""
        self.assertEqual(extract_count("Limited Stock at Tustin Store"), 0)

    def test_marker_takes_priority_over_digits(self):
        """測試售完字樣優先於數字"""
        self.assertEqual(extract_count("SOLD OUT - 25 on order"), 0)
        self.assertEqual(extract_count("3 stores nearby, out of stock here"), 0)

    def test_surrounding_whitespace(self):
        """測試前後空白與換行"""
        self.assertEqual(extract_count("\n   7 in stock\t\n"), 7)

    def test_empty_and_none(self):
        """測試空字串與 None"""
        self.assertEqual(extract_count(""), 0)
        self.assertEqual(extract_count(None), 0)

    def test_negative_token_is_not_a_count(self):
        """測試負數字詞不會被當作數量"""
        self.assertEqual(extract_count("-4 in stock"), 0)

    def test_first_numeric_token_wins(self):
        """測試取第一個數字字詞"""
        self.assertEqual(extract_count("Only 2 left, 15 on display"), 2)

    def test_custom_markers(self):
        """測試自訂售完字樣"""
        self.assertEqual(extract_count("Unavailable 4", depleted_markers=["unavailable"]), 0)
        self.assertEqual(extract_count("Out of stock 4", depleted_markers=["unavailable"]), 4)


class TestReadInventoryText(unittest.TestCase):
    """解析狀態測試"""

    def test_counted_status(self):
        reading = read_inventory_text("5 in stock at Tustin Store")
        self.assertEqual(reading.count, 5)
        self.assertEqual(reading.status, STATUS_COUNTED)

    def test_depleted_status(self):
        reading = read_inventory_text("Out of Stock at Tustin Store")
        self.assertEqual(reading.count, 0)
        self.assertEqual(reading.status, STATUS_DEPLETED)

    def test_unknown_status(self):
        """測試無法判定與確定售完可以區分"""
        reading = read_inventory_text("Limited Stock at Tustin Store")
        self.assertEqual(reading.count, 0)
        self.assertEqual(reading.status, STATUS_UNKNOWN)

    def test_zero_count_is_counted(self):
        reading = read_inventory_text("0 in stock")
        self.assertEqual(reading.count, 0)
        self.assertEqual(reading.status, STATUS_COUNTED)


if __name__ == "__main__":
    unittest.main()
