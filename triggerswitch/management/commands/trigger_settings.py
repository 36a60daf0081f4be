from django.core.management.base import BaseCommand, CommandError

from triggerswitch.models import TriggerSetting
from triggerswitch.registry import registry
from triggerswitch.utils import is_source_enabled


class Command(BaseCommand):
    help = 'List, enable, disable or check trigger switches'

    def add_arguments(self, parser):
        parser.add_argument(
            'action',
            choices=['list', 'enable', 'disable', 'check'],
            help='What to do'
        )
        parser.add_argument(
            'name',
            nargs='?',
            help='Trigger source name (required except for list)'
        )
        parser.add_argument(
            '--description',
            default=None,
            help='Description to store with enable/disable'
        )

    def handle(self, *args, **options):
        action = options['action']
        name = options['name']

        if action == 'list':
            self._list()
            return

        if not name:
            raise CommandError(f"'{action}' requires a trigger source name")

        if action == 'check':
            state = 'enabled' if is_source_enabled(name) else 'disabled'
            self.stdout.write(f'{name}: {state}')
            return

        enabled = action == 'enable'
        defaults = {'enabled': enabled}
        if options['description'] is not None:
            defaults['description'] = options['description']
        _, created = TriggerSetting.objects.update_or_create(
            name=name, defaults=defaults
        )
        verb = 'Created' if created else 'Updated'
        state = 'enabled' if enabled else 'disabled'
        self.stdout.write(self.style.SUCCESS(f'{verb} {name}: {state}'))

    def _list(self):
        settings_by_name = {
            setting.name: setting for setting in TriggerSetting.objects.all()
        }
        names = sorted(set(settings_by_name) | set(registry.get_registered_sources()))

        if not names:
            self.stdout.write(self.style.WARNING('No trigger sources found.'))
            return

        for name in names:
            setting = settings_by_name.get(name)
            if setting is None:
                self.stdout.write(f'  - {name}: enabled (default)')
            elif setting.enabled:
                self.stdout.write(f'  - {name}: enabled')
            else:
                self.stdout.write(self.style.WARNING(f'  - {name}: disabled'))
