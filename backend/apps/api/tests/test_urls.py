from importlib import import_module

from django.core.management import call_command
from django.test import SimpleTestCase
from django.urls import reverse


class UrlConfTests(SimpleTestCase):
    def test_urlconf_imports_with_bearer_authentication_configured(self):
        import_module("apps.auth.authentication")
        urls = import_module("storefront.urls")
        self.assertTrue(urls.urlpatterns)

    def test_system_check_passes(self):
        call_command("check", verbosity=0)

    def test_named_routes_resolve(self):
        self.assertEqual(reverse("api-carts-mine"), "/api/carts/my-cart/")
        self.assertEqual(reverse("api-carts-remove", args=[3]), "/api/carts/remove/3/")
        self.assertEqual(reverse("api-orders"), "/api/orders/")
        self.assertEqual(reverse("auth-login"), "/api/auth/login/")
