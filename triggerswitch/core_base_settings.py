"""
Use core_settings.py to read package settings; Django's settings.py holds
the project settings the overrides come from.
"""
from django.conf import settings


class BaseSettings:
    """Base class for package settings."""
    # Subclasses can override this to specify their settings key
    SETTINGS_KEY: str = ''

    def __init__(self):
        super().__init__()
        if not self.SETTINGS_KEY:
            raise ValueError("SETTINGS_KEY must be defined in subclasses.")
        self.reload()

    def reload(self) -> None:
        """Reset to class defaults, then apply overrides from Django settings."""
        self.__dict__.clear()
        override_settings = getattr(settings, self.SETTINGS_KEY, None) or {}
        for key, value in override_settings.items():
            if hasattr(self, key):
                setattr(self, key, value)
