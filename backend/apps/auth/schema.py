from drf_spectacular.extensions import OpenApiAuthenticationExtension


class BearerPrincipalAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "apps.auth.authentication.BearerPrincipalAuthentication"
    name = "jwtAuth"

    def get_security_definition(self, auto_schema):
        return {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
