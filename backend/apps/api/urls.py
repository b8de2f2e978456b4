from django.urls import path, include

urlpatterns = [
    # Catalog routes sit at the API root: home/, products/, categories/
    path("", include("apps.catalog.urls")),
    path("cart/", include("apps.carts.urls")),
    path("auth/", include("apps.auth.urls")),
]
