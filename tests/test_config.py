#!/usr/bin/env python3
"""
測試設定檔載入

測試：
- 預設值填充
- browser 區塊逐欄合併
- 必填欄位與重複 URL 驗證
"""
import json
import os
import shutil
import tempfile
import unittest

from inventory.config import (
    DEFAULT_DEPLETED_MARKERS,
    BrowserOptions,
    MonitorConfig,
    ProductSpec,
    load_config,
)


PRODUCTS = [
    {"name": "Raspberry Pi 4", "url": "https://www.microcenter.com/product/621439"},
    {"name": "Raspberry Pi 5", "url": "https://www.microcenter.com/product/674503"},
]


class TestLoadConfig(unittest.TestCase):
    """設定檔載入測試"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, "inventory.json")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_config(self, data):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def test_defaults(self):
        """測試預設值"""
        self.write_config({"store_id": 141, "products": PRODUCTS})
        config = load_config(self.config_path)

        self.assertEqual(config.store_id, "141")
        self.assertEqual(config.check_interval_minutes, 5)
        self.assertEqual(config.check_interval_seconds, 300)
        self.assertEqual(config.depleted_markers, DEFAULT_DEPLETED_MARKERS)
        self.assertTrue(config.browser.headless)
        self.assertEqual(config.browser.timeout_seconds, 30)
        self.assertEqual(config.browser.inventory_selector, ".inventory-msg")
        self.assertEqual(config.browser.store_cookie_name, "storeSelected")
        self.assertEqual(
            config.products,
            [ProductSpec(name=p["name"], url=p["url"]) for p in PRODUCTS],
        )

    def test_browser_options_merged(self):
        """測試 browser 區塊只覆寫指定欄位"""
        self.write_config({
            "store_id": "191",
            "check_interval_minutes": 0.5,
            "products": PRODUCTS,
            "browser": {"headless": False, "timeout_seconds": 10},
        })
        config = load_config(self.config_path)

        self.assertFalse(config.browser.headless)
        self.assertEqual(config.browser.timeout_seconds, 10)
        self.assertEqual(config.browser.inventory_selector, ".inventory-msg")
        self.assertEqual(config.check_interval_seconds, 30)

    def test_depleted_markers_normalized(self):
        self.write_config({
            "store_id": 141,
            "products": PRODUCTS,
            "depleted_markers": ["  SOLD OUT ", "", "Unavailable"],
        })
        config = load_config(self.config_path)
        self.assertEqual(config.depleted_markers, ["sold out", "unavailable"])

    def test_depleted_markers_must_be_list(self):
        """測試售完字樣為字串時不會被拆成單一字元"""
        self.write_config({"store_id": 141, "products": PRODUCTS, "depleted_markers": "sold out"})
        with self.assertRaisesRegex(ValueError, "depleted_markers must be a list of strings"):
            load_config(self.config_path)

    def test_depleted_markers_must_be_strings(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "depleted_markers": ["sold out", 0]})
        with self.assertRaisesRegex(ValueError, "depleted_markers"):
            load_config(self.config_path)

    def test_browser_must_be_object(self):
        """測試 browser 為 null 時回報 ValueError"""
        self.write_config({"store_id": 141, "products": PRODUCTS, "browser": None})
        with self.assertRaisesRegex(ValueError, "browser must be an object"):
            load_config(self.config_path)

    def test_headless_must_be_bool(self):
        """測試 headless 為字串 "false" 時不會被當成 True"""
        self.write_config({"store_id": 141, "products": PRODUCTS, "browser": {"headless": "false"}})
        with self.assertRaisesRegex(ValueError, "browser.headless"):
            load_config(self.config_path)

    def test_user_agents_must_be_list(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "browser": {"user_agents": "Mozilla/5.0"}})
        with self.assertRaisesRegex(ValueError, "browser.user_agents"):
            load_config(self.config_path)

    def test_products_must_be_list(self):
        self.write_config({"store_id": 141, "products": {"name": "Pi", "url": "https://example.com"}})
        with self.assertRaisesRegex(ValueError, "products must be a list"):
            load_config(self.config_path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(self.temp_dir, "missing.json"))

    def test_malformed_json(self):
        self.write_config("{not json")
        with self.assertRaises(ValueError):
            load_config(self.config_path)

    def test_missing_store_id(self):
        self.write_config({"products": PRODUCTS})
        with self.assertRaisesRegex(ValueError, "store_id"):
            load_config(self.config_path)

    def test_empty_products(self):
        self.write_config({"store_id": 141, "products": []})
        with self.assertRaisesRegex(ValueError, "products"):
            load_config(self.config_path)

    def test_product_without_name(self):
        self.write_config({"store_id": 141, "products": [{"name": " ", "url": "https://example.com"}]})
        with self.assertRaisesRegex(ValueError, r"products\[0\]\.name"):
            load_config(self.config_path)

    def test_product_without_url(self):
        self.write_config({"store_id": 141, "products": [{"name": "Pi"}]})
        with self.assertRaisesRegex(ValueError, r"products\[0\]\.url"):
            load_config(self.config_path)

    def test_duplicate_url(self):
        """測試重複的商品 URL"""
        self.write_config({"store_id": 141, "products": [PRODUCTS[0], dict(PRODUCTS[0], name="Other")]})
        with self.assertRaisesRegex(ValueError, "Duplicate product url"):
            load_config(self.config_path)

    def test_invalid_interval(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "check_interval_minutes": 0})
        with self.assertRaisesRegex(ValueError, "check_interval_minutes"):
            load_config(self.config_path)

    def test_non_numeric_interval(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "check_interval_minutes": "often"})
        with self.assertRaisesRegex(ValueError, "check_interval_minutes"):
            load_config(self.config_path)

    def test_unknown_key(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "interval": 5})
        with self.assertRaisesRegex(ValueError, "Unknown config key"):
            load_config(self.config_path)

    def test_unknown_browser_option(self):
        self.write_config({"store_id": 141, "products": PRODUCTS, "browser": {"chrome_driver_path": "/usr/bin"}})
        with self.assertRaisesRegex(ValueError, "Unknown browser option"):
            load_config(self.config_path)


class TestMonitorConfig(unittest.TestCase):
    """直接建立設定物件測試"""

    def test_accepts_product_specs(self):
        config = MonitorConfig(
            store_id=141,
            products=[ProductSpec(name="Pi", url="https://example.com/pi")],
            browser=BrowserOptions(headless=False),
        )
        self.assertEqual(config.store_id, "141")
        self.assertFalse(config.browser.headless)

    def test_example_config_is_valid(self):
        """測試範例設定檔可以載入"""
        example = os.path.join(
            os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
            "config", "inventory.example.json",
        )
        config = load_config(example)
        self.assertEqual(config.store_id, "141")
        self.assertEqual(len(config.products), 1)


if __name__ == "__main__":
    unittest.main()
