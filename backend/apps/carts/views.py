from typing import Any, Dict, Optional

from django.utils.translation import gettext as _
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.utils import error_response
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_service
from .serializers import (
    CartAddSerializer,
    CartInfoSerializer,
    CartMutationSerializer,
    CartReadSerializer,
    CartSummarySerializer,
    CartUpdateSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

PRODUCT_PATH_PARAMETER = OpenApiParameter("product_id", int, OpenApiParameter.PATH)


def current_user_id(request) -> Optional[int]:
    user_id = getattr(request, "validated_user_id", None)
    if user_id is not None:
        return int(user_id)
    user = getattr(request, "user", None)
    if user is not None and getattr(user, "is_authenticated", False):
        return int(user.id)
    return None


def cart_totals(service, user_id: Optional[int]) -> Dict[str, Any]:
    return {
        "cartCount": service.get_total_items(user_id),
        "cartTotal": str(service.get_total_price(user_id)),
    }


def product_not_found(product_id: int) -> Response:
    return error_response("NOT_FOUND", "Product not found", {"id": str(product_id)})


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get current cart",
        description="The caller's cart, created on first access, with its validation messages.",
        responses={
            200: CartSummarySerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = current_user_id(request)
        self.log.debug("Fetching cart", user_id=user_id)
        dto, errors = self.service.get_cart_summary(user_id)
        return Response(
            {"cart": CartReadSerializer(dto).data, "errors": errors}
        )


@extend_schema(tags=["Cart"])
class CartInfoView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartInfoView")

    @extend_schema(
        summary="Cart badge info",
        responses={
            200: CartInfoSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = current_user_id(request)
        totals = cart_totals(self.service, user_id)
        totals["isEmpty"] = totals["cartCount"] == 0
        return Response(totals)


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @extend_schema(
        summary="Add product to cart",
        parameters=[PRODUCT_PATH_PARAMETER],
        request=CartAddSerializer,
        responses={
            200: CartMutationSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, product_id: int):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quantity = max(1, serializer.validated_data.get("quantity", 1))
        user_id = current_user_id(request)
        product = self.service.resolve_product(product_id)
        if product is None:
            self.log.info("Add to cart: product not found", product_id=product_id)
            return product_not_found(product_id)
        if not product.is_active:
            self.log.info("Add to cart refused: product inactive", product_id=product_id)
            return error_response(
                "VALIDATION_ERROR",
                _("This product is no longer available."),
                {"productId": product_id},
            )
        if not self.service.add_product(user_id, product, quantity):
            return error_response(
                "VALIDATION_ERROR",
                _("Not enough stock for this quantity."),
                {
                    "productId": product_id,
                    "requested": quantity,
                    "inCart": self.service.get_product_quantity(user_id, product),
                    "available": int(product.stock),
                },
            )
        self.log.info(
            "Product added via API", user_id=user_id, product_id=product_id, quantity=quantity
        )
        payload = {
            "success": True,
            "message": _('%(quantity)d x "%(name)s" added to your cart')
            % {"quantity": quantity, "name": product.name},
            **cart_totals(self.service, user_id),
        }
        return Response(payload)

    @extend_schema(
        summary="Update cart quantity",
        description="A quantity of zero or less removes the product from the cart.",
        parameters=[PRODUCT_PATH_PARAMETER],
        request=CartUpdateSerializer,
        responses={
            200: CartMutationSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, product_id: int):
        serializer = CartUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quantity = serializer.validated_data["quantity"]
        user_id = current_user_id(request)
        product = self.service.resolve_product(product_id)
        if product is None:
            return product_not_found(product_id)
        if not self.service.update_quantity(user_id, product, quantity):
            return error_response(
                "VALIDATION_ERROR",
                _("Unable to update the quantity."),
                {"productId": product_id, "requested": quantity},
            )
        self.log.info(
            "Cart quantity changed via API",
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
        )
        payload = {
            "success": True,
            "message": _("Quantity updated.") if quantity > 0 else _("Product removed."),
            **cart_totals(self.service, user_id),
            "itemTotal": str(self.service.get_item_total(user_id, product)),
        }
        return Response(payload)

    @extend_schema(
        summary="Remove product from cart",
        parameters=[PRODUCT_PATH_PARAMETER],
        responses={
            200: CartMutationSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, product_id: int):
        user_id = current_user_id(request)
        product = self.service.resolve_product(product_id)
        if product is None:
            return product_not_found(product_id)
        if not self.service.remove_product(user_id, product):
            return error_response(
                "NOT_FOUND",
                _("Unable to remove this product."),
                {"productId": product_id},
            )
        payload = {
            "success": True,
            "message": _('"%(name)s" removed from your cart') % {"name": product.name},
            **cart_totals(self.service, user_id),
        }
        return Response(payload)


@extend_schema(tags=["Cart"])
class CartClearView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartClearView")

    @extend_schema(
        summary="Clear cart",
        request=None,
        responses={
            200: CartMutationSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        user_id = current_user_id(request)
        if not self.service.clear_cart(user_id):
            return error_response("UNAUTHORIZED", "Authentication required")
        self.log.info("Cart cleared via API", user_id=user_id)
        payload = {
            "success": True,
            "message": _("Cart cleared."),
            **cart_totals(self.service, user_id),
        }
        return Response(payload)


@extend_schema(tags=["Cart"])
class CartCheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartCheckoutView")

    @extend_schema(
        summary="Checkout confirmation",
        description=(
            "Validates the cart against live stock and availability. Returns the cart "
            "when it can be ordered; 400 for an empty cart, 409 with the problems otherwise."
        ),
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = current_user_id(request)
        dto, error = self.service.checkout(user_id)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(CartReadSerializer(dto).data)
