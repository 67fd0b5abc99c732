from typing import Type, TypeVar, Generic, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Base for ORM-backed repositories.

    Subclasses override ``_base_queryset`` to hydrate relations in one go so
    nothing downstream triggers lazy loads.
    """

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self) -> models.QuerySet:
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)
