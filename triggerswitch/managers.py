from django.db import models
from django.db.models import QuerySet


class ActiveManager(models.Manager):
    """
    Manager that hides soft-deleted records.

    Usage:
        Contact.active.all()  # Excludes rows with deleted_at set
    """

    def get_queryset(self) -> QuerySet:
        return super().get_queryset().filter(deleted_at__isnull=True)


class DeletedManager(models.Manager):
    """Manager over the recycle bin: only soft-deleted records."""

    def get_queryset(self) -> QuerySet:
        return super().get_queryset().filter(deleted_at__isnull=False)
