from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction, IntegrityError
from django.utils import timezone
from django.utils.translation import gettext as _

from apps.common import get_logger
from .dtos import CartDTO
from .mappers import CENTS
from .models import Cart
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


class CartService:
    """
    Every cart state transition goes through here.

    Operations take the id of the current user first (``None`` for anonymous
    callers). Mutations return ``True``/``False``; a business rule failure is
    logged and reported as ``False``, never raised. Stock is checked against a
    row-locked read of the product inside the same transaction as the write.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_current_cart(self, user_id: Optional[int]) -> Optional[Cart]:
        """Return the user's cart, creating an empty one on first access."""
        if user_id is None:
            self.logger.debug("No current user; cart unavailable")
            return None
        cart = self.carts.get_for_owner(user_id)
        if cart:
            return cart
        try:
            with transaction.atomic():
                cart = self.carts.create(owner_id=user_id)
        except IntegrityError:
            # A concurrent request created the cart between lookup and insert.
            cart = self.carts.get_for_owner(user_id)
            if cart is None:
                raise
            self.logger.debug(
                "Cart created by concurrent request", user_id=user_id, cart_id=cart.id
            )
            return cart
        self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return cart

    def resolve_product(self, product_id: int):
        return self.products.get(id=product_id)

    def add_product(self, user_id: Optional[int], product, quantity: int = 1) -> bool:
        cart = self.get_current_cart(user_id)
        if cart is None:
            self.logger.warning("Add rejected: no cart owner", product_id=product.id)
            return False
        if quantity < 1:
            self.logger.warning(
                "Add rejected: quantity below one",
                user_id=user_id,
                product_id=product.id,
                quantity=quantity,
            )
            return False
        with transaction.atomic():
            locked = self.products.get_for_update(product.id)
            if locked is None:
                self.logger.warning("Add rejected: product missing", product_id=product.id)
                return False
            stock = int(locked.stock)
            if quantity > stock:
                self.logger.warning(
                    "Add rejected: insufficient stock",
                    user_id=user_id,
                    product_id=product.id,
                    requested=quantity,
                    stock=stock,
                )
                return False
            item = self.cart_items.get_for_cart_product(cart.id, product.id)
            if item:
                new_quantity = int(item.quantity) + quantity
                if new_quantity > stock:
                    self.logger.warning(
                        "Add rejected: cart total would exceed stock",
                        user_id=user_id,
                        product_id=product.id,
                        in_cart=item.quantity,
                        requested=quantity,
                        stock=stock,
                    )
                    return False
                self.cart_items.set_quantity(item, new_quantity)
            else:
                self.cart_items.create(
                    cart=cart, product=locked, quantity=quantity, added_at=timezone.now()
                )
            self.carts.touch(cart)
        self.logger.info(
            "Product added to cart",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product.id,
            quantity=quantity,
        )
        return True

    def update_quantity(self, user_id: Optional[int], product, quantity: int) -> bool:
        cart = self.get_current_cart(user_id)
        if cart is None:
            self.logger.warning("Update rejected: no cart owner", product_id=product.id)
            return False
        item = self.cart_items.get_for_cart_product(cart.id, product.id)
        if not item:
            self.logger.warning(
                "Update rejected: product not in cart",
                user_id=user_id,
                product_id=product.id,
            )
            return False
        if quantity <= 0:
            return self.remove_product(user_id, product)
        with transaction.atomic():
            locked = self.products.get_for_update(product.id)
            stock = int(locked.stock) if locked is not None else 0
            if quantity > stock:
                self.logger.warning(
                    "Update rejected: insufficient stock",
                    user_id=user_id,
                    product_id=product.id,
                    requested=quantity,
                    stock=stock,
                )
                return False
            self.cart_items.set_quantity(item, quantity)
            self.carts.touch(cart)
        self.logger.info(
            "Cart quantity updated",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product.id,
            quantity=quantity,
        )
        return True

    def remove_product(self, user_id: Optional[int], product) -> bool:
        cart = self.get_current_cart(user_id)
        if cart is None:
            self.logger.warning("Remove rejected: no cart owner", product_id=product.id)
            return False
        item = self.cart_items.get_for_cart_product(cart.id, product.id)
        if not item:
            self.logger.warning(
                "Remove rejected: product not in cart",
                user_id=user_id,
                product_id=product.id,
            )
            return False
        with transaction.atomic():
            self.cart_items.delete(item)
            self.carts.touch(cart)
        self.logger.info(
            "Product removed from cart",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product.id,
        )
        return True

    def clear_cart(self, user_id: Optional[int]) -> bool:
        cart = self.get_current_cart(user_id)
        if cart is None:
            self.logger.warning("Clear rejected: no cart owner")
            return False
        with transaction.atomic():
            self.cart_items.delete_for_cart(cart)
            self.carts.touch(cart)
        self.logger.info("Cart cleared", user_id=user_id, cart_id=cart.id)
        return True

    def _items(self, user_id: Optional[int]) -> List[Any]:
        cart = self.get_current_cart(user_id)
        if cart is None:
            return []
        return list(self.cart_items.list_for_cart(cart.id))

    def get_total_items(self, user_id: Optional[int]) -> int:
        return sum(int(item.quantity) for item in self._items(user_id))

    def get_total_price(self, user_id: Optional[int]) -> Decimal:
        total = sum(
            (Decimal(str(item.product.price)) * int(item.quantity) for item in self._items(user_id)),
            Decimal("0.00"),
        )
        return total.quantize(CENTS)

    def _find_item(self, user_id: Optional[int], product):
        cart = self.get_current_cart(user_id)
        if cart is None:
            return None
        return self.cart_items.get_for_cart_product(cart.id, product.id)

    def has_product(self, user_id: Optional[int], product) -> bool:
        return self._find_item(user_id, product) is not None

    def get_product_quantity(self, user_id: Optional[int], product) -> int:
        item = self._find_item(user_id, product)
        return int(item.quantity) if item else 0

    def get_item_total(self, user_id: Optional[int], product) -> Decimal:
        """Price times quantity of the product's line, zero when absent."""
        item = self._find_item(user_id, product)
        if not item:
            return Decimal("0.00")
        return (Decimal(str(item.product.price)) * int(item.quantity)).quantize(CENTS)

    def validate_cart(self, user_id: Optional[int]) -> List[str]:
        items = self._items(user_id)
        if not items:
            return [_("Your cart is empty")]
        errors: List[str] = []
        for item in items:
            product = item.product
            if not product.is_active:
                errors.append(
                    _('Product "%(name)s" is no longer available') % {"name": product.name}
                )
                continue
            if int(item.quantity) > int(product.stock):
                errors.append(
                    _(
                        'Insufficient stock for "%(name)s" '
                        "(requested: %(requested)d, available: %(available)d)"
                    )
                    % {
                        "name": product.name,
                        "requested": int(item.quantity),
                        "available": int(product.stock),
                    }
                )
        if errors:
            self.logger.info("Cart validation found problems", user_id=user_id, count=len(errors))
        return errors

    def get_cart(self, user_id: Optional[int]) -> Optional[CartDTO]:
        cart = self.get_current_cart(user_id)
        if cart is None:
            return None
        return self.cart_mapper.to_dto(cart, self.cart_items.list_for_cart(cart.id))

    def get_cart_summary(
        self, user_id: Optional[int]
    ) -> Tuple[Optional[CartDTO], List[str]]:
        """Cart view plus validation messages; an empty cart reports no errors."""
        self.logger.debug("Building cart summary", user_id=user_id)
        dto = self.get_cart(user_id)
        if dto is None or not dto.items:
            return dto, []
        return dto, self.validate_cart(user_id)

    def checkout(
        self, user_id: Optional[int]
    ) -> Tuple[Optional[CartDTO], Optional[ServiceError]]:
        self.logger.debug("Checkout requested", user_id=user_id)
        dto = self.get_cart(user_id)
        if dto is None or not dto.items:
            self.logger.warning("Checkout rejected: cart empty", user_id=user_id)
            return None, ("VALIDATION_ERROR", _("Your cart is empty"), None)
        errors = self.validate_cart(user_id)
        if errors:
            self.logger.warning(
                "Checkout rejected: cart invalid", user_id=user_id, count=len(errors)
            )
            return None, ("CONFLICT", _("Cart validation failed"), {"errors": errors})
        self.logger.info(
            "Checkout validated",
            user_id=user_id,
            cart_id=dto.id,
            total_items=dto.total_items,
            total_price=dto.total_price,
        )
        return dto, None
