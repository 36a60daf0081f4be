import logging
from typing import Optional

from triggerswitch.providers import BaseConfigProvider, get_provider

logger = logging.getLogger(__name__)


def is_source_enabled(
    source_name: str,
    provider: Optional[BaseConfigProvider] = None
) -> bool:
    """
    Check whether a trigger source is enabled.

    Fails open: a missing setting, a provider error or a non-boolean value
    all resolve to True. Nothing is cached, so every call asks the provider.

    Args:
        source_name: The trigger source name
        provider: Provider to ask. Defaults to TRIGGER_SETTINGS['PROVIDER'].

    Returns:
        False only if the provider holds an explicit False for source_name
    """
    try:
        if provider is None:
            provider = get_provider()
        enabled = provider.lookup(source_name)
    except Exception as e:
        logger.warning(
            f"Trigger setting lookup for '{source_name}' failed, "
            f"defaulting to enabled: {e}"
        )
        return True

    if enabled is None:
        logger.debug(f"No trigger setting for '{source_name}', defaulting to enabled")
        return True

    if not isinstance(enabled, bool):
        logger.warning(
            f"Trigger setting for '{source_name}' is not a boolean ({enabled!r}), "
            "defaulting to enabled"
        )
        return True

    return enabled
