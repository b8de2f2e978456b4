import unittest
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from apps.carts.mappers import CartItemMapper, CartMapper


class StubCategoryManager:
    def all(self):
        return []


def make_product(product_id, price):
    return SimpleNamespace(
        id=product_id,
        name=f"P{product_id}",
        description="",
        price=Decimal(price),
        stock=10,
        is_active=True,
        seller_id=1,
        seller=SimpleNamespace(company_name=None, first_name="Ada", last_name="Lovelace", email="a@x.io"),
        created_at=None,
        categories=StubCategoryManager(),
    )


class CartMapperTests(unittest.TestCase):
    def test_to_dto_computes_line_and_cart_totals(self):
        created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        cart = SimpleNamespace(id=4, owner_id=9, created_at=created, updated_at=None)
        items = [
            SimpleNamespace(product=make_product(1, "19.99"), quantity=3, added_at=created),
            SimpleNamespace(product=make_product(2, "0.10"), quantity=1, added_at=None),
        ]
        dto = CartMapper(CartItemMapper()).to_dto(cart, items)
        self.assertEqual(dto.owner_id, 9)
        self.assertEqual(dto.created_at, created.isoformat())
        self.assertIsNone(dto.updated_at)
        self.assertEqual(dto.total_items, 4)
        self.assertEqual(dto.total_price, "60.07")
        self.assertEqual([i.line_total for i in dto.items], ["59.97", "0.10"])
        self.assertEqual(dto.items[0].product.seller_name, "Ada Lovelace")

    def test_empty_cart(self):
        cart = SimpleNamespace(id=1, owner_id=2, created_at=None, updated_at=None)
        dto = CartMapper().to_dto(cart, [])
        self.assertEqual(dto.items, [])
        self.assertEqual(dto.total_items, 0)
        self.assertEqual(dto.total_price, "0.00")
