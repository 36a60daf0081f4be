"""
Configuration providers for trigger switches.

A provider answers one question: is the trigger source with this name
enabled? ``lookup`` returns True or False when the provider holds a setting
for the source and None when it does not. Providers raise ConfigLookupError
when they cannot answer; the gate treats that the same as None.

The provider used by default is configured with TRIGGER_SETTINGS['PROVIDER']:

    TRIGGER_SETTINGS = {
        'PROVIDER': 'triggerswitch.providers.SettingsConfigProvider',
        'SOURCES': {
            'AccountTrigger': {'enabled': False},
        },
    }
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.utils.module_loading import import_string

from triggerswitch.core_settings import trigger_settings
from triggerswitch.exceptions import ConfigLookupError, MalformedConfigError


def _coerce_enabled(source_name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise MalformedConfigError(
            source_name, f"expected a boolean 'enabled' value, got {value!r}"
        )
    return value


class BaseConfigProvider(ABC):
    """Abstract base class for trigger setting providers."""

    @abstractmethod
    def lookup(self, source_name: str) -> Optional[bool]:
        """
        Look up the enabled flag for a trigger source.

        Args:
            source_name: The trigger source name

        Returns:
            The stored flag, or None if nothing is stored for source_name

        Raises:
            ConfigLookupError: If the store cannot be read or holds bad data
        """
        pass


class ModelConfigProvider(BaseConfigProvider):
    """Reads TriggerSetting rows from the database."""

    def lookup(self, source_name: str) -> Optional[bool]:
        from triggerswitch.models import TriggerSetting

        try:
            enabled = (
                TriggerSetting.objects
                .filter(name=source_name)
                .values_list('enabled', flat=True)
                .first()
            )
        except DatabaseError as e:
            raise ConfigLookupError(source_name, str(e)) from e

        if enabled is None:
            return None
        return _coerce_enabled(source_name, enabled)


class SettingsConfigProvider(BaseConfigProvider):
    """Reads TRIGGER_SETTINGS['SOURCES'] from Django settings."""

    def lookup(self, source_name: str) -> Optional[bool]:
        sources = trigger_settings.SOURCES
        if not isinstance(sources, dict):
            raise MalformedConfigError(
                source_name, "TRIGGER_SETTINGS['SOURCES'] must be a dict"
            )
        source = sources.get(source_name)
        if source is None:
            return None
        if not isinstance(source, dict) or 'enabled' not in source:
            raise MalformedConfigError(
                source_name, f"expected {{'enabled': bool}}, got {source!r}"
            )
        return _coerce_enabled(source_name, source['enabled'])


class ChainConfigProvider(BaseConfigProvider):
    """
    Asks several providers in order and returns the first answer.

    Usage:
        provider = ChainConfigProvider([
            SettingsConfigProvider(),
            ModelConfigProvider(),
        ])
    """

    def __init__(self, providers: Iterable[BaseConfigProvider]):
        self.providers: List[BaseConfigProvider] = list(providers)

    def lookup(self, source_name: str) -> Optional[bool]:
        for provider in self.providers:
            enabled = provider.lookup(source_name)
            if enabled is not None:
                return enabled
        return None


def get_provider() -> BaseConfigProvider:
    """
    Instantiate the provider named by TRIGGER_SETTINGS['PROVIDER'].

    Raises:
        ImproperlyConfigured: If the dotted path cannot be imported or does
            not name a BaseConfigProvider subclass
    """
    provider_path = trigger_settings.PROVIDER
    try:
        provider_class = import_string(provider_path)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"TRIGGER_SETTINGS['PROVIDER'] refers to '{provider_path}', "
            f"which could not be imported: {e}"
        ) from e

    if not (isinstance(provider_class, type) and issubclass(provider_class, BaseConfigProvider)):
        raise ImproperlyConfigured(
            f"TRIGGER_SETTINGS['PROVIDER'] must name a BaseConfigProvider "
            f"subclass, got '{provider_path}'"
        )
    return provider_class()
