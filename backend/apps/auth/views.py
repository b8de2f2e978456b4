from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.utils import error_response
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from apps.users.dtos import user_to_dto
from apps.users.serializers import UserReadSerializer
from .serializers import (
    RegisterRequestSerializer,
    LoginResponseSerializer,
    LogoutRequestSerializer,
    DetailResponseSerializer,
    StorefrontTokenObtainPairSerializer,
)
from .container import build_registration_service, build_session_service

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_registration_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register user",
        description=(
            "Creates a client account, or a professional account when account_type is "
            "'pro' (company_name required). All validation messages are returned together."
        ),
        request=RegisterRequestSerializer,
        responses={
            201: UserReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Processing registration request",
            email=serializer.validated_data.get("email"),
        )
        result = self.service.register(serializer.validated_data)
        if isinstance(result, tuple):
            code, message, details = result
            self.log.warning("Registration failed", code=code, detail=message)
            return error_response(code, message, details)
        self.log.info("Registration completed", user_id=result.id)
        return Response(
            UserReadSerializer(result).data, status=status.HTTP_201_CREATED
        )


@extend_schema(
    tags=["Auth"],
    summary="Login (JWT obtain pair)",
    responses={200: LoginResponseSerializer},
)
class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = StorefrontTokenObtainPairSerializer


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    permission_classes = [AllowAny]


@extend_schema(
    tags=["Auth"], summary="Get current user", responses={200: UserReadSerializer}
)
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    log = logger.bind(view="MeView")

    def get(self, request):
        user = request.user
        self.log.debug("Returning current user profile", user_id=user.id)
        return Response(UserReadSerializer(user_to_dto(user)).data)


@extend_schema(tags=["Auth"])
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_session_service()
    log = logger.bind(view="LogoutView")

    @extend_schema(
        summary="Logout (blacklist refresh)",
        request=LogoutRequestSerializer,
        responses={
            200: DetailResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        actor_id = getattr(request.user, "id", None)
        error = self.service.logout(request.data.get("refresh"), actor_id)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response({"detail": "Logged out"}, status=status.HTTP_200_OK)
