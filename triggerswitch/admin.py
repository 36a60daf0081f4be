from django.contrib import admin
from .models import TriggerSetting


class TriggerSettingAdmin(admin.ModelAdmin):
    list_display = ('name', 'enabled', 'description', 'updated_at')
    list_editable = ('enabled',)
    list_filter = ('enabled',)
    search_fields = ('name', 'description')
    readonly_fields = ('created_at', 'updated_at')

admin.site.register(TriggerSetting, TriggerSettingAdmin)
