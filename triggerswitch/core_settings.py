from typing import Dict

from django.core.signals import setting_changed
from django.dispatch import receiver

from triggerswitch.core_base_settings import BaseSettings
from triggerswitch.types import TriggerSourceTypedDict


class TriggerSwitchSettings(BaseSettings):
    """Default trigger settings. Can be overridden with TRIGGER_SETTINGS."""
    SETTINGS_KEY = 'TRIGGER_SETTINGS'

    PROVIDER: str = 'triggerswitch.providers.ModelConfigProvider'
    AUTODISCOVER: bool = True
    SOURCES: Dict[str, TriggerSourceTypedDict] = {}

trigger_settings = TriggerSwitchSettings()


@receiver(setting_changed)
def reload_trigger_settings(*, setting, **kwargs):
    if setting == TriggerSwitchSettings.SETTINGS_KEY:
        trigger_settings.reload()
