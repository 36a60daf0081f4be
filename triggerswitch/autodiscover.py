"""
Auto-discovery mechanism for trigger handler registration.
Similar to Django's admin autodiscover functionality.
"""

import logging
from importlib import import_module
from django.apps import apps
from django.utils.module_loading import module_has_submodule

logger = logging.getLogger(__name__)


def autodiscover():
    """
    Import the triggers.py module of every installed app so that handlers
    decorated with registry.register() are connected.
    Called from TriggerSwitchConfig.ready().
    """
    for app_config in apps.get_app_configs():
        # Skip Django's built-in apps
        if app_config.name.startswith('django.'):
            continue

        if module_has_submodule(app_config.module, 'triggers'):
            try:
                import_module(f'{app_config.name}.triggers')
                logger.debug(f"Successfully imported triggers from {app_config.name}")
            except ImportError as e:
                logger.error(f"Failed to import triggers from {app_config.name}: {e}")
                raise
