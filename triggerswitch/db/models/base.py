import uuid
from django.db import models
from django.utils import timezone

from triggerswitch.managers import ActiveManager, DeletedManager
from triggerswitch.signals import pre_soft_delete, post_soft_delete, post_restore


class BaseModel(models.Model):
    id = models.UUIDField(default=uuid.uuid4, unique=True, primary_key=True)
    metadata = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Managers
    objects = models.Manager()  # Default manager

    class Meta:
        abstract = True


class SoftDeleteModel(BaseModel):
    """
    BaseModel with a recycle bin.

    soft_delete() and restore() write ``deleted_at`` with a queryset update,
    so pre_save/post_save are not sent. They send pre_soft_delete,
    post_soft_delete and post_restore instead, which registered triggers
    route to before_delete, after_delete and after_restore.
    """
    deleted_at = models.DateTimeField(blank=True, null=True, db_index=True)

    # Managers
    objects = models.Manager()  # Default manager
    active = ActiveManager()
    deleted = DeletedManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Move the record to the recycle bin. No-op if already there."""
        if self.is_deleted:
            return
        sender = self.__class__
        pre_soft_delete.send(sender=sender, instance=self)
        self.deleted_at = timezone.now()
        sender._base_manager.filter(pk=self.pk).update(deleted_at=self.deleted_at)
        post_soft_delete.send(sender=sender, instance=self)

    def restore(self) -> None:
        """Take the record out of the recycle bin. No-op if not deleted."""
        if not self.is_deleted:
            return
        sender = self.__class__
        self.deleted_at = None
        sender._base_manager.filter(pk=self.pk).update(deleted_at=None)
        post_restore.send(sender=sender, instance=self)
