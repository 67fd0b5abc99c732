from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.carts.models import Cart
from apps.catalog.models import Product


class TestCarts(APITestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user(username="cartuser", password="TestPass123")
        self.other = User.objects.create_user(username="other", password="TestPass123")
        self.keyboard = Product.objects.create(title="Keyboard", price="10.00")
        self.mouse = Product.objects.create(title="Mouse", price="5.00")

    def _auth(self, user=None):
        token = AccessToken.for_user(user or self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def _add(self, product_id, quantity):
        return self.client.post(
            reverse("api-carts-add"),
            {"product_id": product_id, "quantity": quantity},
            format="json",
        )

    def test_requires_bearer_token(self):
        res = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")

    def test_rejects_garbage_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        res = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_my_cart_created_on_first_access(self):
        self._auth()
        res = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["items"], [])
        self.assertEqual(res.data["total"], "0.00")
        self.assertEqual(Cart.objects.filter(user=self.user).count(), 1)
        self.client.get(reverse("api-carts-mine"))
        self.assertEqual(Cart.objects.filter(user=self.user).count(), 1)

    def test_add_merge_and_totals(self):
        self._auth()
        res = self._add(self.keyboard.id, 2)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total"], "20.00")
        res = self._add(self.keyboard.id, 1)
        self.assertEqual(len(res.data["items"]), 1)
        self.assertEqual(res.data["items"][0]["quantity"], 3)
        self.assertEqual(res.data["total"], "30.00")
        res = self._add(self.mouse.id, 1)
        self.assertEqual(res.data["total"], "35.00")
        self.assertEqual(
            [item["product_id"] for item in res.data["items"]],
            [self.keyboard.id, self.mouse.id],
        )

    def test_price_change_does_not_touch_existing_line(self):
        self._auth()
        self._add(self.keyboard.id, 1)
        Product.objects.filter(id=self.keyboard.id).update(price="99.00")
        res = self._add(self.keyboard.id, 1)
        self.assertEqual(res.data["items"][0]["unit_price"], "10.00")
        self.assertEqual(res.data["total"], "20.00")

    def test_invalid_quantity_is_rejected(self):
        self._auth()
        res = self._add(self.keyboard.id, 0)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        cart = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(cart.data["items"], [])

    def test_unknown_product_is_not_found(self):
        self._auth()
        res = self._add(999999, 1)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_remove_and_clear(self):
        self._auth()
        self._add(self.keyboard.id, 2)
        self._add(self.mouse.id, 1)
        res = self.client.delete(reverse("api-carts-remove", args=[self.keyboard.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total"], "5.00")
        res = self.client.delete(reverse("api-carts-remove", args=[self.keyboard.id]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        res = self.client.delete(reverse("api-carts-clear"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["items"], [])
        self.assertEqual(res.data["total"], "0.00")
        res = self.client.delete(reverse("api-carts-clear"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_remove_from_empty_cart_keeps_version(self):
        self._auth()
        before = self.client.get(reverse("api-carts-mine")).data["version"]
        res = self.client.delete(reverse("api-carts-remove", args=[self.keyboard.id]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        after = self.client.get(reverse("api-carts-mine")).data["version"]
        self.assertEqual(before, after)

    def test_carts_are_isolated_per_user(self):
        self._auth()
        self._add(self.keyboard.id, 2)
        self._auth(self.other)
        res = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(res.data["items"], [])

    def test_token_of_deleted_user_is_rejected(self):
        self._auth()
        self.user.delete()
        res = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")
        self.assertFalse(Cart.objects.exists())

    def test_token_of_inactive_user_is_rejected(self):
        self._auth()
        self.user.is_active = False
        self.user.save(update_fields=["is_active"])
        res = self._add(self.keyboard.id, 1)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_oversized_quantity_is_validation_error(self):
        self._auth()
        for quantity in (2**63, 10**11):
            with self.subTest(quantity=quantity):
                res = self._add(self.keyboard.id, quantity)
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")

    def test_total_overflow_is_validation_error(self):
        self._auth()
        res = self._add(self.keyboard.id, 10**9)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        cart = self.client.get(reverse("api-carts-mine"))
        self.assertEqual(cart.data["items"], [])
        self.assertEqual(cart.data["total"], "0.00")
