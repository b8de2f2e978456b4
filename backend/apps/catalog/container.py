from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from .repositories import ProductRepository, CategoryRepository
from .services import CategoryService, ProductService, StorefrontService, DEFAULT_PAGE_SIZE


def build_product_service(*, disable_cache: bool = False) -> ProductService:
    return ProductService(
        products=ProductRepository(),
        categories=CategoryRepository(),
        cache_backend=cache,
        page_size=getattr(settings, "PRODUCTS_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        disable_cache=disable_cache,
    )


def build_category_service() -> CategoryService:
    return CategoryService(categories=CategoryRepository())


def build_storefront_service() -> StorefrontService:
    return StorefrontService(
        products=ProductRepository(), categories=CategoryRepository()
    )
