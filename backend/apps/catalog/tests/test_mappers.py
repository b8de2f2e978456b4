import unittest
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from apps.catalog.mappers import CategoryMapper, ProductMapper


class StubCategory:
    def __init__(self, category_id: int, name: str, slug: str = "", description=None):
        self.id = category_id
        self.name = name
        self.slug = slug or name.lower()
        self.description = description


class StubCategoryManager:
    def __init__(self, categories=None):
        self._categories = list(categories or [])

    def all(self):
        return list(self._categories)


class StubProduct:
    def __init__(self, product_id: int, name: str, price, *, seller=None, categories=None, created_at=None):
        self.id = product_id
        self.name = name
        self.description = None
        self.price = price
        self.stock = 7
        self.is_active = True
        self.seller = seller
        self.seller_id = getattr(seller, "id", None)
        self.created_at = created_at
        self.categories = StubCategoryManager(categories)


class CategoryMapperTests(unittest.TestCase):
    def test_category_mapper_basic(self):
        dto = CategoryMapper.to_dto(StubCategory(1, "Electronics"))
        self.assertEqual(dto.id, 1)
        self.assertEqual(dto.slug, "electronics")
        self.assertEqual(dto.description, "")

    def test_category_many(self):
        dtos = CategoryMapper.many_to_dto([StubCategory(1, "A"), StubCategory(2, "B")])
        self.assertSetEqual({d.name for d in dtos}, {"A", "B"})


class ProductMapperTests(unittest.TestCase):
    def test_product_mapper_with_categories(self):
        created = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        product = StubProduct(
            3,
            "Phone",
            Decimal("10.00"),
            categories=[StubCategory(1, "Cat1"), StubCategory(2, "Cat2")],
            created_at=created,
        )
        dto = ProductMapper.to_dto(product)
        self.assertEqual(dto.price, "10.00")
        self.assertEqual(dto.stock, 7)
        self.assertEqual(dto.description, "")
        self.assertEqual(dto.created_at, created.isoformat())
        self.assertSetEqual({c.name for c in dto.categories}, {"Cat1", "Cat2"})

    def test_product_mapper_no_seller_or_categories(self):
        dto = ProductMapper.to_dto(StubProduct(4, "Solo", "3.99"))
        self.assertEqual(dto.categories, [])
        self.assertEqual(dto.seller_name, "")
        self.assertIsNone(dto.seller_id)
        self.assertIsNone(dto.created_at)

    def test_seller_name_prefers_company(self):
        seller = SimpleNamespace(id=9, company_name="Acme", first_name="Jo", last_name="Doe", email="jo@x.io")
        self.assertEqual(ProductMapper.to_dto(StubProduct(1, "P", "1.00", seller=seller)).seller_name, "Acme")

    def test_seller_name_falls_back_to_full_name_then_email(self):
        seller = SimpleNamespace(id=9, company_name="", first_name="Jo", last_name="Doe", email="jo@x.io")
        self.assertEqual(ProductMapper.to_dto(StubProduct(1, "P", "1.00", seller=seller)).seller_name, "Jo Doe")
        seller = SimpleNamespace(id=9, company_name="", first_name="", last_name="", email="jo@x.io")
        self.assertEqual(ProductMapper.to_dto(StubProduct(1, "P", "1.00", seller=seller)).seller_name, "jo@x.io")
