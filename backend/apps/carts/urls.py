from django.urls import path
from .views import MyCartView, CartAddItemView, CartRemoveItemView, CartClearView

urlpatterns = [
    path("my-cart/", MyCartView.as_view(), name="api-carts-mine"),
    path("add/", CartAddItemView.as_view(), name="api-carts-add"),
    path(
        "remove/<int:product_id>/",
        CartRemoveItemView.as_view(),
        name="api-carts-remove",
    ),
    path("clear/", CartClearView.as_view(), name="api-carts-clear"),
]
