from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: int
    name: str
    slug: str
    description: str


@dataclass
class ProductDTO:
    id: int
    name: str
    description: str
    price: str
    stock: int
    is_active: bool
    seller_id: Optional[int]
    seller_name: str
    created_at: Optional[str]
    categories: List[CategoryDTO]


@dataclass
class ProductPageDTO:
    count: int
    page: int
    num_pages: int
    results: List[ProductDTO]


@dataclass
class ProductDetailDTO:
    product: ProductDTO
    related: List[ProductDTO] = field(default_factory=list)


@dataclass
class CategoryListingDTO:
    category: CategoryDTO
    products: ProductPageDTO


@dataclass
class HomeDTO:
    latest: List[ProductDTO]
    premium: List[ProductDTO]
    categories: List[CategoryDTO]


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
