import unittest
from core.converters import (
    clamp_non_negative, clamp_percent, format_money, format_number, to_number, to_quantity,
)

class TestFormInputs(unittest.TestCase):
    def test_to_number(self):
        self.assertEqual(to_number(""), 0.0)
        self.assertEqual(to_number(None), 0.0)
        self.assertEqual(to_number("  12,5 "), 12.5)
        self.assertEqual(to_number("abc", default=3.0), 3.0)
        self.assertEqual(to_number(float("nan")), 0.0)
        self.assertEqual(to_number(7), 7.0)
        # Non-finite entries behave like an empty field on both paths
        for raw in ("nan", "inf", "-inf", "1e400", float("inf"), float("-inf")):
            self.assertEqual(to_number(raw), 0.0, raw)
        self.assertEqual(to_quantity(float("inf")), 0)

    def test_clamps(self):
        self.assertEqual(clamp_non_negative(-4), 0.0)
        self.assertEqual(clamp_percent(250, 100), 100)
        self.assertEqual(clamp_percent(-5, 99), 0)
        self.assertEqual(to_quantity(3.99), 3)
        self.assertEqual(to_quantity(-1), 0)

class TestMoneyFormat(unittest.TestCase):
    def test_slovak_default(self):
        self.assertEqual(format_money(274.32), "274,32\u00a0€")
        self.assertEqual(format_money(1234567.891), "1\u00a0234\u00a0567,89\u00a0€")
        self.assertEqual(format_money(0), "0,00\u00a0€")

    def test_other_locales(self):
        self.assertEqual(format_money(1234.5, "de-DE"), "1.234,50\u00a0€")
        self.assertEqual(format_money(1234.5, "en-IE"), "€1,234.50")
        self.assertEqual(format_money(-9.999, "en-US"), "-$10.00")
        # Unknown locales fall back to sk-SK
        self.assertEqual(format_money(5, "xx-XX"), "5,00\u00a0€")

    def test_no_negative_zero(self):
        self.assertEqual(format_money(-0.001), "0,00\u00a0€")

    def test_format_number(self):
        self.assertEqual(format_number(20.0), "20")
        self.assertEqual(format_number(12.5), "12,5")
        self.assertEqual(format_number(12.5, "en-US"), "12.5")

if __name__ == '__main__':
    unittest.main()
