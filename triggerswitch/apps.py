from django.apps import AppConfig


class TriggerSwitchConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'triggerswitch'
    verbose_name = 'Trigger Switch'

    def ready(self):
        """
        Register trigger handlers from all installed apps once the app
        registry is ready.
        """
        from triggerswitch.core_settings import trigger_settings

        if trigger_settings.AUTODISCOVER:
            from triggerswitch.autodiscover import autodiscover
            autodiscover()
