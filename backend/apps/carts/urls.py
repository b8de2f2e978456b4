from django.urls import path

from .views import (
    CartCheckoutView,
    CartClearView,
    CartInfoView,
    CartItemView,
    CartView,
)

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("info/", CartInfoView.as_view(), name="api-cart-info"),
    path("items/<int:product_id>/", CartItemView.as_view(), name="api-cart-item"),
    path("clear/", CartClearView.as_view(), name="api-cart-clear"),
    path("checkout/", CartCheckoutView.as_view(), name="api-cart-checkout"),
]
