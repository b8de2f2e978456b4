import unittest
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory

from apps.api.validation import validate_request_context
from apps.catalog.dtos import (
    CategoryDTO,
    CategoryListingDTO,
    HomeDTO,
    ProductDetailDTO,
    ProductDTO,
    ProductPageDTO,
)
from apps.catalog.views import (
    CategoryListView,
    CategoryProductsView,
    HomeView,
    ProductDetailView,
    ProductListView,
    ProductSearchView,
)


def make_category_dto(category_id=1, name="Electronics"):
    return CategoryDTO(id=category_id, name=name, slug=name.lower(), description="")


def make_product_dto(product_id=1, name="Widget", stock=2):
    return ProductDTO(
        id=product_id,
        name=name,
        description="A product",
        price="10.00",
        stock=stock,
        is_active=True,
        seller_id=5,
        seller_name="Acme",
        created_at=None,
        categories=[make_category_dto()],
    )


def make_page(*products, page=1):
    return ProductPageDTO(count=len(products), page=page, num_pages=1, results=list(products))


class CatalogViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def dispatch(self, request, view_cls, **kwargs):
        pre_response = validate_request_context(request, view_cls, kwargs)
        if pre_response is not None:
            return pre_response
        view = view_cls.as_view()
        return view(request, **kwargs)

    def test_home_returns_sections(self):
        service_mock = Mock()
        service_mock.home.return_value = HomeDTO(
            latest=[make_product_dto(1)],
            premium=[make_product_dto(2, "Premium")],
            categories=[make_category_dto()],
        )
        with patch.object(HomeView, "service", service_mock):
            response = self.dispatch(self.factory.get("/api/home/"), HomeView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["premium"][0]["name"], "Premium")
        self.assertEqual(response.data["categories"][0]["slug"], "electronics")

    def test_product_list_passes_page(self):
        service_mock = Mock()
        service_mock.list_products.return_value = make_page(make_product_dto(), page=2)
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.get("/api/products/", {"page": "2"})
            response = self.dispatch(request, ProductListView)
        self.assertEqual(response.status_code, 200)
        service_mock.list_products.assert_called_once_with("2")
        self.assertEqual(response.data["page"], 2)
        self.assertTrue(response.data["results"][0]["in_stock"])

    def test_out_of_stock_flag(self):
        service_mock = Mock()
        service_mock.list_products.return_value = make_page(make_product_dto(stock=0))
        with patch.object(ProductListView, "service", service_mock):
            response = self.dispatch(self.factory.get("/api/products/"), ProductListView)
        self.assertFalse(response.data["results"][0]["in_stock"])

    def test_search_echoes_trimmed_query(self):
        service_mock = Mock()
        service_mock.search.return_value = make_page(make_product_dto())
        with patch.object(ProductSearchView, "service", service_mock):
            request = self.factory.get("/api/products/search/", {"q": "  widget "})
            response = self.dispatch(request, ProductSearchView)
        self.assertEqual(response.status_code, 200)
        service_mock.search.assert_called_once_with("widget", 1)
        self.assertEqual(response.data["query"], "widget")
        self.assertEqual(response.data["count"], 1)

    def test_product_detail_found(self):
        service_mock = Mock()
        service_mock.get_product.return_value = ProductDetailDTO(
            product=make_product_dto(3), related=[make_product_dto(4, "Other")]
        )
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/3/")
            response = self.dispatch(request, ProductDetailView, product_id=3)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["product"]["id"], 3)
        self.assertEqual(response.data["related"][0]["name"], "Other")

    def test_product_detail_not_found(self):
        service_mock = Mock()
        service_mock.get_product.return_value = None
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/10/")
            response = self.dispatch(request, ProductDetailView, product_id=10)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(response.data["error"]["message"], "Product not found")

    def test_category_list(self):
        service_mock = Mock()
        service_mock.list_categories.return_value = [
            make_category_dto(1, "Books"),
            make_category_dto(2, "Electronics"),
        ]
        with patch.object(CategoryListView, "service", service_mock):
            response = self.dispatch(self.factory.get("/api/categories/"), CategoryListView)
        self.assertEqual([c["name"] for c in response.data], ["Books", "Electronics"])

    def test_category_products(self):
        service_mock = Mock()
        service_mock.list_by_category.return_value = CategoryListingDTO(
            category=make_category_dto(), products=make_page(make_product_dto())
        )
        with patch.object(CategoryProductsView, "service", service_mock):
            request = self.factory.get("/api/categories/electronics/products/")
            response = self.dispatch(request, CategoryProductsView, slug="electronics")
        self.assertEqual(response.status_code, 200)
        service_mock.list_by_category.assert_called_once_with("electronics", 1)
        self.assertEqual(response.data["category"]["name"], "Electronics")
        self.assertEqual(len(response.data["products"]["results"]), 1)

    def test_category_products_unknown_slug(self):
        service_mock = Mock()
        service_mock.list_by_category.return_value = None
        with patch.object(CategoryProductsView, "service", service_mock):
            request = self.factory.get("/api/categories/nope/products/")
            response = self.dispatch(request, CategoryProductsView, slug="nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["details"], {"slug": "nope"})
