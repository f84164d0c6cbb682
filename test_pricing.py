import unittest
from core.catalog import CATALOG_BY_KEY, PRICE_CATALOG
from core.models import OutletKind, QuoteState
from engines.pricing import PriceLogic

NBSP = "\u00a0"

class TestQuoteTotals(unittest.TestCase):
    def setUp(self):
        self.state = PriceLogic.new_state()

    def _example_quote(self):
        self.state.set_quantity("panel", 1)
        self.state.set_quantity("socket", 3)
        self.state.set_materials_cost(50)
        self.state.set_distance_km(20)
        self.state.set_rate_per_km(0.45)
        self.state.set_callout_fee(0)
        self.state.set_discount_pct(10)
        self.state.set_vat_pct(20)

    def test_catalog(self):
        self.assertEqual(len(PRICE_CATALOG), 7)
        self.assertEqual(
            [i.key for i in PRICE_CATALOG],
            ["panel", "circuit", "socket", "switch", "light", "hob", "service_hour"],
        )
        self.assertEqual(CATALOG_BY_KEY["panel"].unit_price, 180)
        with self.assertRaises(TypeError):
            CATALOG_BY_KEY["extra"] = PRICE_CATALOG[0]

    def test_reference_example(self):
        # Labour 180 + 3*5 = 195, travel 20*0.45 = 9, subtotal 254
        self._example_quote()
        b = PriceLogic.calculate(self.state)
        self.assertAlmostEqual(b.labor_sum, 195)
        self.assertAlmostEqual(b.travel_sum, 9)
        self.assertAlmostEqual(b.sub_total, 254)
        self.assertAlmostEqual(b.discount_amount, 25.4)
        self.assertAlmostEqual(b.net_amount, 228.6)
        self.assertAlmostEqual(b.vat_amount, 45.72)
        self.assertAlmostEqual(b.grand_total, 274.32)
        self.assertEqual([l.key for l in b.lines], ["panel", "socket"])
        self.assertEqual(b.lines[1].line_total, 15)

    def test_total_identities(self):
        for discount in (0, 15, 50, 100):
            self._example_quote()
            self.state.set_discount_pct(discount)
            b = PriceLogic.calculate(self.state)
            self.assertEqual(b.grand_total, b.net_amount + b.vat_amount)
            self.assertEqual(b.net_amount, max(0.0, b.sub_total - b.discount_amount))

    def test_full_discount_clamps_net_to_zero(self):
        self._example_quote()
        self.state.set_discount_pct(100)
        b = PriceLogic.calculate(self.state)
        self.assertEqual(b.net_amount, 0.0)
        self.assertEqual(b.vat_amount, 0.0)
        self.assertEqual(b.grand_total, 0.0)

    def test_empty_quote(self):
        b = PriceLogic.calculate(self.state)
        self.assertEqual(b.grand_total, 0)
        self.assertEqual(b.lines, [])

class TestQuoteState(unittest.TestCase):
    def setUp(self):
        self.state = PriceLogic.new_state()

    def test_socket_clears_circuit(self):
        self.state.set_circuit_package(True)
        self.assertEqual(self.state.quantity("circuit"), 1)
        self.state.set_quantity("socket", 4)
        self.assertEqual(self.state.quantity("socket"), 4)
        self.assertEqual(self.state.quantity("circuit"), 0)

    def test_circuit_clears_socket(self):
        self.state.set_quantity("socket", 6)
        self.state.set_quantity("circuit", 2)
        self.assertEqual(self.state.quantity("circuit"), 2)
        self.assertEqual(self.state.quantity("socket"), 0)
        self.assertEqual(self.state.outlets.kind, OutletKind.CIRCUIT)

    def test_never_both_positive(self):
        moves = [("socket", 3), ("circuit", 1), ("socket", 0), ("circuit", 0),
                 ("socket", 2), ("socket", 5), ("circuit", 1), ("socket", 1)]
        for key, qty in moves:
            self.state.set_quantity(key, qty)
            both = self.state.quantity("socket") > 0 and self.state.quantity("circuit") > 0
            self.assertFalse(both, f"after {key}={qty}")
            if qty > 0:
                other = "circuit" if key == "socket" else "socket"
                self.assertEqual(self.state.quantity(other), 0)

    def test_zero_socket_keeps_circuit(self):
        self.state.set_circuit_package(True)
        self.state.set_quantity("socket", 0)
        self.assertEqual(self.state.quantity("circuit"), 1)

    def test_unchecking_circuit(self):
        self.state.set_circuit_package(True)
        self.state.set_circuit_package(False)
        self.assertEqual(self.state.quantity("circuit"), 0)
        self.assertEqual(self.state.outlets.kind, OutletKind.NONE)

    def test_clamping_at_entry(self):
        self.state.set_quantity("light", -3)
        self.assertEqual(self.state.quantity("light"), 0)
        self.state.set_quantity("light", 2.7)
        self.assertEqual(self.state.quantity("light"), 2)
        self.state.set_quantity("switch", "")
        self.assertEqual(self.state.quantity("switch"), 0)
        self.state.set_materials_cost(-10)
        self.assertEqual(self.state.materials_cost, 0)
        self.state.set_rate_per_km(0.456)
        self.assertEqual(self.state.rate_per_km, 0.46)
        self.state.set_discount_pct(150)
        self.assertEqual(self.state.discount_pct, 100)
        self.state.set_vat_pct(120)
        self.assertEqual(self.state.vat_pct, 99)
        self.state.set_vat_pct(-1)
        self.assertEqual(self.state.vat_pct, 0)
        # Infinite or garbage entries never raise
        self.state.set_quantity("light", float("inf"))
        self.assertEqual(self.state.quantity("light"), 0)
        self.state.set_quantity("socket", "1e400")
        self.assertEqual(self.state.quantity("socket"), 0)
        self.state.set_distance_km("nan")
        self.assertEqual(self.state.distance_km, 0)
        self.state.set_discount_pct(float("inf"))
        self.assertEqual(self.state.discount_pct, 0)

    def test_unknown_key(self):
        with self.assertRaises(KeyError):
            self.state.set_quantity("ladder", 1)
        with self.assertRaises(KeyError):
            self.state.quantity("ladder")

    def test_reset_all(self):
        self.state.set_quantity("panel", 2)
        self.state.set_quantity("socket", 8)
        self.state.set_materials_cost(120)
        self.state.set_distance_km(33)
        self.state.set_rate_per_km(1.2)
        self.state.set_callout_fee(25)
        self.state.set_discount_pct(5)
        self.state.set_vat_pct(10)
        self.state.reset_all()

        self.assertEqual(self.state, PriceLogic.new_state())
        for item in PRICE_CATALOG:
            self.assertEqual(self.state.quantity(item.key), 0)
        self.assertEqual(self.state.rate_per_km, 0.45)
        self.assertEqual(self.state.vat_pct, 20)
        self.assertEqual(self.state.materials_cost, 0)
        self.assertEqual(self.state.distance_km, 0)
        self.assertEqual(self.state.callout_fee, 0)
        self.assertEqual(self.state.discount_pct, 0)

    def test_defaults(self):
        fresh = QuoteState()
        self.assertEqual(fresh.rate_per_km, 0.45)
        self.assertEqual(fresh.vat_pct, 20)

class TestBreakdownText(unittest.TestCase):
    def test_example_text(self):
        state = PriceLogic.new_state()
        state.set_quantity("panel", 1)
        state.set_quantity("socket", 3)
        state.set_materials_cost(50)
        state.set_distance_km(20)
        state.set_discount_pct(10)

        text = PriceLogic.breakdown_text(state)
        expected = [
            "Price estimate",
            "— Items —",
            f"Distribution board installation (apartment): 1 pcs × 180,00{NBSP}€ = 180,00{NBSP}€",
            f"Socket replacement / addition: 3 pcs × 5,00{NBSP}€ = 15,00{NBSP}€",
            f"Materials: 50,00{NBSP}€",
            f"Travel: 20 km × 0,45{NBSP}€ = 9,00{NBSP}€",
            f"Discount 10%: −25,40{NBSP}€",
            f"Subtotal: 228,60{NBSP}€",
            f"VAT 20%: 45,72{NBSP}€",
            f"Total: 274,32{NBSP}€",
        ]
        self.assertEqual(text.split("\n"), expected)

    def test_optional_lines(self):
        state = PriceLogic.new_state()
        text = PriceLogic.breakdown_text(state)
        self.assertNotIn("Callout", text)
        self.assertNotIn("Discount", text)

        state.set_callout_fee(15)
        text = PriceLogic.breakdown_text(state, locale="en-IE")
        self.assertIn("Callout (flat): €15.00", text)
        self.assertTrue(text.endswith("Total: €18.00"))

    def test_deterministic(self):
        state = PriceLogic.new_state()
        state.set_quantity("hob", 1)
        state.set_quantity("service_hour", 2)
        self.assertEqual(PriceLogic.breakdown_text(state), PriceLogic.breakdown_text(state))

if __name__ == '__main__':
    unittest.main()
