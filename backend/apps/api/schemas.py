"""OpenAPI shapes for the error envelope returned by ``error_response``."""
from rest_framework import serializers


class ErrorBodySerializer(serializers.Serializer):
    code = serializers.ChoiceField(
        choices=[
            "VALIDATION_ERROR",
            "EMPTY_CART",
            "UNAUTHORIZED",
            "NOT_FOUND",
            "CONFLICT",
            "CONSISTENCY_ERROR",
            "SERVER_ERROR",
        ]
    )
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.DictField(required=False)
    hint = serializers.CharField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorBodySerializer()
