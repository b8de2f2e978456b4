from django.db.models import Q

from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)

    def list_active(self):
        return self.model.objects.filter(is_active=True).order_by("name")

    def get_active_by_slug(self, slug: str):
        return self.model.objects.filter(slug=slug, is_active=True).first()


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def _base_queryset(self):
        """Products with seller and categories loaded to avoid N+1 during DTO mapping."""
        return self.model.objects.select_related("seller").prefetch_related("categories")

    def _active(self):
        return self._base_queryset().filter(is_active=True)

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()

    def get_for_update(self, product_id: int):
        """Re-read a product row under a lock; only meaningful inside a transaction."""
        return self.model.objects.select_for_update().filter(id=product_id).first()

    def list_active(self):
        return self._active().order_by("-created_at", "-id")

    def list_active_in_category(self, category_id: int):
        return (
            self._active()
            .filter(categories__id=category_id)
            .distinct()
            .order_by("-created_at", "-id")
        )

    def search_active(self, query: str):
        return (
            self._active()
            .filter(Q(name__icontains=query) | Q(description__icontains=query))
            .order_by("name", "id")
        )

    def latest_active(self, limit: int):
        return list(self.list_active()[:limit])

    def premium_active(self, limit: int):
        return list(self._active().order_by("-price", "-id")[:limit])

    def related_active(self, product: Product, limit: int):
        category = product.categories.order_by("id").first()
        if category is None:
            return []
        return list(
            self._active()
            .filter(categories=category)
            .exclude(id=product.id)
            .distinct()
            .order_by("-created_at", "-id")[:limit]
        )
