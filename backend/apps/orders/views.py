from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_order_service
from .serializers import OrderReadSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")


class OrderServiceView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_order_service)

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.service = self.service_factory()


@extend_schema(tags=["Orders"])
class OrderListView(OrderServiceView):
    log = logger.bind(view="OrderListView")

    @extend_schema(
        summary="List my orders",
        description="Returns the caller's orders, newest first.",
        responses={
            200: OrderReadSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        orders = self.service.get_my_orders(request.user.id)
        return Response(OrderReadSerializer(orders, many=True).data)

    @extend_schema(
        summary="Checkout",
        description=(
            "Converts the caller's cart into a pending order and empties the cart "
            "in a single transaction."
        ),
        request=None,
        responses={
            201: OrderReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        self.log.info("Checkout via API", user_id=request.user.id)
        order = self.service.create_order(request.user.id)
        return Response(OrderReadSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderDetailView(OrderServiceView):
    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", str, OpenApiParameter.PATH)],
        responses={
            200: OrderReadSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, order_id: str):
        order = self.service.get_order_by_id(request.user.id, order_id)
        return Response(OrderReadSerializer(order).data)
