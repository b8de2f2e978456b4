from __future__ import annotations

from typing import Any, Optional

from django.core.paginator import Paginator

from apps.common import get_logger
from .dtos import (
    CategoryListingDTO,
    HomeDTO,
    ProductDetailDTO,
    ProductPageDTO,
)
from .mappers import CategoryMapper, ProductMapper
from .protocols import (
    CacheBackendProtocol,
    CategoryRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")

DEFAULT_PAGE_SIZE = 12
RELATED_PRODUCTS_LIMIT = 4
LATEST_PRODUCTS_LIMIT = 8
PREMIUM_PRODUCTS_LIMIT = 6


def paginate_products(queryset, page: Any, page_size: int) -> ProductPageDTO:
    """Slice a product sequence into a page; bad or out-of-range numbers are clamped."""
    paginator = Paginator(queryset, page_size)
    page_obj = paginator.get_page(page)
    return ProductPageDTO(
        count=paginator.count,
        page=page_obj.number,
        num_pages=paginator.num_pages,
        results=ProductMapper.many_to_dto(page_obj.object_list),
    )


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        page_size: int = DEFAULT_PAGE_SIZE,
        disable_cache: bool = False,
    ):
        self.products = products
        self.categories = categories
        self.cache = cache_backend
        self.page_size = page_size
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def invalidate(self) -> None:
        """Drop every cached product page by moving to a new key version."""
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v + 1)

    @staticmethod
    def _page_number(page: Any) -> int:
        try:
            return int(page)
        except (TypeError, ValueError):
            return 1

    def _cache_key(self, scope: str, page: Any) -> str:
        version = self._get_cache_version()
        page = self._page_number(page)
        return f"{self._cache_prefix}:v{version}:{scope}:p{page}:s{self.page_size}"

    def _cached_page(self, scope: str, page: Any, queryset_factory) -> ProductPageDTO:
        if self.disable_cache:
            return paginate_products(queryset_factory(), page, self.page_size)
        key = self._cache_key(scope, page)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product page cache hit", cache_key=key)
            return cached
        self.logger.debug("Product page cache miss", cache_key=key)
        data = paginate_products(queryset_factory(), page, self.page_size)
        self.cache.set(key, data)
        return data

    def list_products(self, page: Any = 1) -> ProductPageDTO:
        self.logger.debug("Listing active products", page=page)
        return self._cached_page("all", page, self.products.list_active)

    def list_by_category(self, slug: str, page: Any = 1) -> Optional[CategoryListingDTO]:
        self.logger.debug("Listing products by category", slug=slug, page=page)
        category = self.categories.get_active_by_slug(slug)
        if not category:
            self.logger.info("Category not found or inactive", slug=slug)
            return None
        products = self._cached_page(
            f"category-{category.id}",
            page,
            lambda: self.products.list_active_in_category(category.id),
        )
        return CategoryListingDTO(
            category=CategoryMapper.to_dto(category), products=products
        )

    def search(self, query: Optional[str], page: Any = 1) -> ProductPageDTO:
        term = (query or "").strip()
        if not term:
            self.logger.debug("Blank search query; falling back to product list")
            return self.list_products(page)
        self.logger.debug("Searching products", query=term, page=page)
        return paginate_products(self.products.search_active(term), page, self.page_size)

    def get_product(self, product_id: int) -> Optional[ProductDetailDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            return None
        if not product.is_active:
            self.logger.info("Product not available", product_id=product_id)
            return None
        related = self.products.related_active(product, RELATED_PRODUCTS_LIMIT)
        return ProductDetailDTO(
            product=ProductMapper.to_dto(product),
            related=ProductMapper.many_to_dto(related),
        )


class CategoryService:
    def __init__(self, categories: CategoryRepositoryProtocol):
        self.categories = categories
        self.logger = logger.bind(service="CategoryService")

    def list_categories(self):
        self.logger.debug("Listing active categories")
        return CategoryMapper.many_to_dto(self.categories.list_active())

    def get_category(self, slug: str):
        self.logger.debug("Fetching category", slug=slug)
        category = self.categories.get_active_by_slug(slug)
        if not category:
            self.logger.info("Category not found", slug=slug)
        return CategoryMapper.to_dto(category) if category else None


class StorefrontService:
    """Assembles the home page: latest arrivals, premium picks and categories."""

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
    ):
        self.products = products
        self.categories = categories
        self.logger = logger.bind(service="StorefrontService")

    def home(self) -> HomeDTO:
        self.logger.debug("Building home page")
        return HomeDTO(
            latest=ProductMapper.many_to_dto(
                self.products.latest_active(LATEST_PRODUCTS_LIMIT)
            ),
            premium=ProductMapper.many_to_dto(
                self.products.premium_active(PREMIUM_PRODUCTS_LIMIT)
            ),
            categories=CategoryMapper.many_to_dto(self.categories.list_active()),
        )
