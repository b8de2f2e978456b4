from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.models import Category, Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]: ...

    def get_for_update(self, product_id: int) -> Optional["Product"]: ...

    def list_active(self) -> Iterable["Product"]: ...

    def list_active_in_category(self, category_id: int) -> Iterable["Product"]: ...

    def search_active(self, query: str) -> Iterable["Product"]: ...

    def latest_active(self, limit: int) -> Iterable["Product"]: ...

    def premium_active(self, limit: int) -> Iterable["Product"]: ...

    def related_active(self, product: "Product", limit: int) -> Iterable["Product"]: ...


class CategoryRepositoryProtocol(Protocol):
    def list_active(self) -> Iterable["Category"]: ...

    def get_active_by_slug(self, slug: str) -> Optional["Category"]: ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None: ...
