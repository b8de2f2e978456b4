from decimal import Decimal
from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper
from .dtos import CartDTO, CartItemDTO
from .models import Cart, CartItem

CENTS = Decimal("0.01")


def line_total(item: CartItem) -> Decimal:
    return (Decimal(str(item.product.price)) * int(item.quantity)).quantize(CENTS)


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            product=self.product_mapper.to_dto(item.product),
            quantity=int(item.quantity),
            line_total=str(line_total(item)),
            added_at=_isoformat(getattr(item, "added_at", None)),
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, item_mapper: Optional[CartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart, items: Iterable[CartItem]) -> CartDTO:
        items = list(items)
        total_price = sum((line_total(i) for i in items), Decimal("0.00"))
        return CartDTO(
            id=cart.id,
            owner_id=cart.owner_id,
            created_at=_isoformat(cart.created_at),
            updated_at=_isoformat(cart.updated_at),
            items=self.item_mapper.many_to_dto(items),
            total_items=sum(int(i.quantity) for i in items),
            total_price=str(total_price.quantize(CENTS)),
        )
