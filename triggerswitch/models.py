from django.db import models


class TriggerSetting(models.Model):
    """
    On/off switch for one trigger source.

    A missing row means the trigger is enabled. Rows are edited by operators
    in the admin or with the ``trigger_settings`` management command and are
    only ever read by the trigger machinery.
    """
    name = models.CharField(
        max_length=255, unique=True,
        help_text="Trigger source name, e.g. 'AccountTrigger'."
    )
    enabled = models.BooleanField(default=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Trigger setting'
        verbose_name_plural = 'Trigger settings'

    def __str__(self):
        state = 'enabled' if self.enabled else 'disabled'
        return f"{self.name} ({state})"
