from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    product: ProductDTO
    quantity: int
    line_total: str
    added_at: Optional[str] = None


@dataclass
class CartDTO:
    id: int
    owner_id: int
    created_at: Optional[str]
    updated_at: Optional[str]
    items: List[CartItemDTO] = field(default_factory=list)
    total_items: int = 0
    total_price: str = "0.00"
