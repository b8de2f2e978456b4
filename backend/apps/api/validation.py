from typing import Any, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

# Views that only make sense for a known user; every method is guarded.
AUTHENTICATED_VIEWS = frozenset(
    {
        "CartView",
        "CartInfoView",
        "CartItemView",
        "CartClearView",
        "CartCheckoutView",
        "MeView",
        "LogoutView",
    }
)


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # DRF attaches the authenticated user later in the request lifecycle. Since this
    # middleware runs earlier, attempt JWT authentication manually to support bearer tokens.
    meta = getattr(request, "META", {}) or {}
    if not meta.get("HTTP_AUTHORIZATION"):
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id


def _check_product_identifier(view_kwargs) -> Any:
    product_id = view_kwargs.get("product_id")
    if product_id is None:
        return None
    try:
        value = int(product_id)
    except (TypeError, ValueError):
        value = 0
    if value < 1:
        logger.warning("Invalid product identifier in cart request", value=product_id)
        return error_response(
            "VALIDATION_ERROR",
            "Invalid product identifier",
            {"productId": str(product_id)},
        )
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Pre-dispatch checks keyed by view class name.

    Returns an error ``Response`` to short-circuit the request, or ``None`` to let
    the view run. Guarded views get ``request.validated_user_id`` populated.
    """
    view_name = getattr(view_class, "__name__", "")
    if view_name not in AUTHENTICATED_VIEWS:
        return None

    if not _is_authenticated_user(request):
        logger.warning(
            "View requires authentication",
            view=view_name,
            method=getattr(request, "method", None),
        )
        return error_response("UNAUTHORIZED", "Authentication required")
    user_id = int(request.user.id)
    _set_validated_user(request, user_id)

    if view_name == "CartItemView":
        result = _check_product_identifier(view_kwargs or {})
        if result is not None:
            return result

    logger.debug("Validated request user", view=view_name, user_id=user_id)
    return None
