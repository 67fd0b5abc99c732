from django.urls import path, include

urlpatterns = [
    path("auth/", include("apps.auth.urls")),
    path("carts/", include("apps.carts.urls")),
    path("orders/", include("apps.orders.urls")),
]
