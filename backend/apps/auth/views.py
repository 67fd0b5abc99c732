from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_registration_service
from .serializers import RegisterRequestSerializer, RegisterResponseSerializer

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_registration_service)
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Processing registration request",
            username=serializer.validated_data.get("username"),
        )
        result = self.service_factory().register(serializer.validated_data)
        self.log.info("Registration completed", user_id=result["id"])
        return Response(
            RegisterResponseSerializer(result).data, status=status.HTTP_201_CREATED
        )


@extend_schema(tags=["Auth"], summary="Login (JWT obtain pair)")
class LoginView(TokenObtainPairView):
    authentication_classes = []
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    authentication_classes = []
    permission_classes = [AllowAny]
