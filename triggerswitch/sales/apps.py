from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'triggerswitch.sales'
    label = 'sales'
    verbose_name = 'Sales'
