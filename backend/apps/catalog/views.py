from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.utils import error_response
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import (
    build_category_service,
    build_product_service,
    build_storefront_service,
)
from .serializers import (
    CategoryListingSerializer,
    CategorySerializer,
    HomeSerializer,
    ProductDetailSerializer,
    ProductPageSerializer,
    SearchResultSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

PAGE_PARAMETER = OpenApiParameter(
    name="page", description="1-based page number", required=False, type=int
)


@extend_schema(tags=["Catalog"])
class HomeView(APIView):
    permission_classes = [AllowAny]
    service = build_storefront_service()
    log = logger.bind(view="HomeView")

    @extend_schema(
        operation_id="storefront_home",
        summary="Storefront home",
        description="Latest arrivals, the most expensive products and active categories.",
        responses={200: HomeSerializer},
    )
    def get(self, request):
        self.log.debug("Handling home request")
        dto = self.service.home()
        return Response(HomeSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Active products, newest first. Cached results may be served.",
        parameters=[PAGE_PARAMETER],
        responses={200: ProductPageSerializer},
    )
    def get(self, request):
        page = request.query_params.get("page", 1)
        self.log.debug("Handling product list request", page=page)
        dto = self.service.list_products(page)
        return Response(ProductPageSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class ProductSearchView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductSearchView")

    @extend_schema(
        operation_id="products_search",
        summary="Search products",
        description=(
            "Case-insensitive match on name or description, ordered by name. "
            "A blank query returns the regular product listing."
        ),
        parameters=[
            OpenApiParameter(name="q", description="Search term", required=False, type=str),
            PAGE_PARAMETER,
        ],
        responses={200: SearchResultSerializer},
    )
    def get(self, request):
        query = (request.query_params.get("q") or "").strip()
        page = request.query_params.get("page", 1)
        self.log.debug("Handling product search", query=query, page=page)
        dto = self.service.search(query, page)
        data = dict(ProductPageSerializer(dto).data)
        data["query"] = query
        return Response(data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            self.log.info("Product not found", product_id=product_id)
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductDetailSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Listing categories")
        data = self.service.list_categories()
        return Response(CategorySerializer(data, many=True).data)


@extend_schema(tags=["Catalog"])
class CategoryProductsView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="CategoryProductsView")

    @extend_schema(
        operation_id="categories_products",
        summary="List products in category",
        parameters=[OpenApiParameter("slug", str, OpenApiParameter.PATH), PAGE_PARAMETER],
        responses={
            200: CategoryListingSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, slug: str):
        page = request.query_params.get("page", 1)
        self.log.debug("Listing category products", slug=slug, page=page)
        dto = self.service.list_by_category(slug, page)
        if not dto:
            return error_response("NOT_FOUND", "Category not found", {"slug": slug})
        return Response(CategoryListingSerializer(dto).data)
