from django.urls import path

from .views import (
    CategoryListView,
    CategoryProductsView,
    HomeView,
    ProductDetailView,
    ProductListView,
    ProductSearchView,
)

urlpatterns = [
    path("home/", HomeView.as_view(), name="api-home"),
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path("products/search/", ProductSearchView.as_view(), name="api-products-search"),
    path(
        "products/<int:product_id>/",
        ProductDetailView.as_view(),
        name="api-products-detail",
    ),
    path("categories/", CategoryListView.as_view(), name="api-categories-list"),
    path(
        "categories/<slug:slug>/products/",
        CategoryProductsView.as_view(),
        name="api-categories-products",
    ),
]
