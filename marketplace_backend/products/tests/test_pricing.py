from decimal import Decimal

from django.test import SimpleTestCase

from products.services.pricing import parse_discount_percent, unit_discount_amount


class DiscountParsingTests(SimpleTestCase):
    def test_marketplace_formats(self):
        self.assertEqual(parse_discount_percent("-15%"), Decimal("15"))
        self.assertEqual(parse_discount_percent("15 % off"), Decimal("15"))
        self.assertEqual(parse_discount_percent("-12.5%"), Decimal("12.5"))

    def test_missing_or_invalid_is_zero(self):
        self.assertEqual(parse_discount_percent(None), Decimal("0"))
        self.assertEqual(parse_discount_percent(""), Decimal("0"))
        self.assertEqual(parse_discount_percent("n/a"), Decimal("0"))
        self.assertEqual(parse_discount_percent("150%"), Decimal("0"))

    def test_unit_discount_amount(self):
        self.assertEqual(
            unit_discount_amount(initial_price=Decimal("20.00"), discount="-25%"),
            Decimal("5"),
        )
