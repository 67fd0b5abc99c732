from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_service
from .serializers import CartItemWriteSerializer, CartReadSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")


class CartServiceView(APIView):
    """Base view: authenticated caller, fresh service per request."""

    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_cart_service)

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.service = self.service_factory()


@extend_schema(tags=["Carts"])
class MyCartView(CartServiceView):
    log = logger.bind(view="MyCartView")

    @extend_schema(
        summary="Get my cart",
        description="Returns the caller's cart, creating an empty one on first access.",
        responses={
            200: CartReadSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        cart = self.service.get_or_create_cart(request.user.id)
        self.log.debug("Returning cart", user_id=request.user.id, cart_id=cart.id)
        return Response(CartReadSerializer(cart).data)


@extend_schema(tags=["Carts"])
class CartAddItemView(CartServiceView):
    log = logger.bind(view="CartAddItemView")

    @extend_schema(
        summary="Add item to cart",
        description=(
            "Adds a product to the caller's cart. If the product is already in the cart its "
            "quantity is increased; the price captured on first addition is kept."
        ),
        request=CartItemWriteSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.log.info(
            "Adding item via API",
            user_id=request.user.id,
            product_id=data["product_id"],
            quantity=data["quantity"],
        )
        cart = self.service.add_or_update_item(
            request.user.id, data["product_id"], data["quantity"]
        )
        return Response(CartReadSerializer(cart).data)


@extend_schema(tags=["Carts"])
class CartRemoveItemView(CartServiceView):
    log = logger.bind(view="CartRemoveItemView")

    @extend_schema(
        summary="Remove item from cart",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: CartReadSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, product_id: int):
        self.log.info(
            "Removing item via API", user_id=request.user.id, product_id=product_id
        )
        cart = self.service.remove_item(request.user.id, product_id)
        return Response(CartReadSerializer(cart).data)


@extend_schema(tags=["Carts"])
class CartClearView(CartServiceView):
    log = logger.bind(view="CartClearView")

    @extend_schema(
        summary="Clear cart",
        responses={
            200: CartReadSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request):
        self.log.info("Clearing cart via API", user_id=request.user.id)
        cart = self.service.clear_cart(request.user.id)
        return Response(CartReadSerializer(cart).data)
