from typing import Type, TypeVar, Generic, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM gateway shared by the app repositories."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def save(self, obj: T, *fields: str) -> T:
        if fields:
            obj.save(update_fields=list(fields))
        else:
            obj.save()
        return obj

    def delete(self, obj: T):
        obj.delete()
