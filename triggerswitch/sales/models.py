from django.db import models
from triggerswitch.db.models import BaseModel, SoftDeleteModel

STATUS_ACTIVE = {"label": "Active", "value": "active"}
STATUS_INACTIVE = {"label": "Inactive", "value": "inactive"}


class Account(BaseModel):
    name = models.CharField(max_length=255, blank=True)
    # metadata fields:
    # status: ({"label": "Active", "value": "active"}, {"label": "Inactive", "value": "inactive"})

    def __str__(self):
        return self.name

    @property
    def status(self) -> str:
        return ((self.metadata or {}).get('status') or {}).get('value', '')


class Contact(SoftDeleteModel):
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255, blank=True)
    title = models.CharField(max_length=255, blank=True)
    email = models.EmailField(max_length=255, blank=True)
    account = models.ForeignKey(
        'Account', on_delete=models.SET_NULL, related_name='contacts', null=True, blank=True
    )
    # metadata fields:
    # status: ({"label": "Active", "value": "active"}, {"label": "Inactive", "value": "inactive"})
    # "previous_email": "string"
    # "restore_count": "integer"

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def status(self) -> str:
        return ((self.metadata or {}).get('status') or {}).get('value', '')
