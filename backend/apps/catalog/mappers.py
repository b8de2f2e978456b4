from typing import Iterable, List

from .dtos import ProductDTO, CategoryDTO
from .models import Product, Category


def _seller_name(seller) -> str:
    if seller is None:
        return ""
    company = getattr(seller, "company_name", None)
    if company:
        return company
    full_name = " ".join(
        part
        for part in (getattr(seller, "first_name", ""), getattr(seller, "last_name", ""))
        if part
    )
    return full_name or getattr(seller, "email", "")


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(
            id=cat.id,
            name=cat.name,
            slug=cat.slug,
            description=cat.description or "",
        )

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        created = getattr(product, "created_at", None)
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description or "",
            price=str(product.price),
            stock=int(product.stock),
            is_active=bool(product.is_active),
            seller_id=getattr(product, "seller_id", None),
            seller_name=_seller_name(getattr(product, "seller", None)),
            created_at=created.isoformat() if created else None,
            categories=CategoryMapper.many_to_dto(product.categories.all()),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
