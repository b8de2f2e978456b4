from django.utils import timezone

from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_for_owner(self, owner_id: int):
        return self.model.objects.filter(owner_id=owner_id).first()

    def touch(self, cart: Cart):
        cart.updated_at = timezone.now()
        return self.save(cart, "updated_at")


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def _base_queryset(self):
        return self.model.objects.select_related(
            "product", "product__seller"
        ).prefetch_related("product__categories")

    def list_for_cart(self, cart_id: int):
        return self._base_queryset().filter(cart_id=cart_id).order_by("added_at", "id")

    def get_for_cart_product(self, cart_id: int, product_id: int):
        return (
            self._base_queryset()
            .filter(cart_id=cart_id, product_id=product_id)
            .first()
        )

    def set_quantity(self, item: CartItem, quantity: int):
        item.quantity = quantity
        return self.save(item, "quantity")

    def delete_for_cart(self, cart: Cart):
        self.model.objects.filter(cart=cart).delete()
