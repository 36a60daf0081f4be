"""
Tests for resolving and caching the enabled flag of a trigger source.
"""
from django.test import TestCase, override_settings

from triggerswitch.exceptions import ConfigLookupError
from triggerswitch.gate import TriggerGate
from triggerswitch.handlers import TriggerHandler
from triggerswitch.models import TriggerSetting
from triggerswitch.tests.utils import StubProvider
from triggerswitch.utils import is_source_enabled


class TriggerGateTests(TestCase):
    """Tests for TriggerGate against the database provider."""

    def test_missing_setting_is_enabled(self):
        """No TriggerSetting row means the trigger is enabled."""
        self.assertTrue(TriggerGate('ContactSource').is_enabled())

    def test_disabled_setting(self):
        """Test a row with enabled=False disables the trigger."""
        TriggerSetting.objects.create(name='AccountSource', enabled=False)
        self.assertFalse(TriggerGate('AccountSource').is_enabled())

    def test_enabled_setting(self):
        """Test a row with enabled=True enables the trigger."""
        TriggerSetting.objects.create(name='AccountSource', enabled=True)
        self.assertTrue(TriggerGate('AccountSource').is_enabled())

    def test_other_sources_do_not_leak(self):
        """A disabled row only affects the source it names."""
        TriggerSetting.objects.create(name='AccountSource', enabled=False)
        self.assertTrue(TriggerGate('AccountSourceV2').is_enabled())

    def test_flag_does_not_change_after_construction(self):
        """Editing the row mid-invocation does not affect an existing gate."""
        setting = TriggerSetting.objects.create(name='AccountSource', enabled=True)
        gate = TriggerGate('AccountSource')

        setting.enabled = False
        setting.save()

        self.assertTrue(gate.is_enabled())
        self.assertFalse(TriggerGate('AccountSource').is_enabled())

    def test_empty_source_name_rejected(self):
        """Test an empty source name is rejected."""
        with self.assertRaises(ValueError):
            TriggerGate('')

    def test_source_name_property(self):
        """Test source_name and repr of a gate."""
        gate = TriggerGate('AccountSource', provider=StubProvider(False))
        self.assertEqual(gate.source_name, 'AccountSource')
        self.assertIn('AccountSource', repr(gate))


class TriggerGateProviderTests(TestCase):
    """Tests for TriggerGate with stub providers."""

    def test_single_lookup(self):
        """is_enabled() never re-queries the provider."""
        provider = StubProvider(False)
        gate = TriggerGate('AccountSource', provider=provider)

        results = [gate.is_enabled() for _ in range(5)]

        self.assertEqual(results, [False] * 5)
        self.assertEqual(provider.calls, ['AccountSource'])

    def test_lookup_error_fails_open(self):
        """Test a ConfigLookupError resolves to enabled and is logged."""
        provider = StubProvider(error=ConfigLookupError('AccountSource', 'unreachable'))
        with self.assertLogs('triggerswitch.utils', level='WARNING') as logs:
            gate = TriggerGate('AccountSource', provider=provider)
        self.assertTrue(gate.is_enabled())
        self.assertIn('defaulting to enabled', logs.output[0])

    def test_unexpected_error_fails_open(self):
        """Any exception from the provider is absorbed."""
        provider = StubProvider(error=RuntimeError('boom'))
        with self.assertLogs('triggerswitch.utils', level='WARNING'):
            gate = TriggerGate('AccountSource', provider=provider)
        self.assertTrue(gate.is_enabled())

    def test_non_boolean_value_fails_open(self):
        """Test a non-boolean provider answer resolves to enabled."""
        provider = StubProvider(value='no')
        with self.assertLogs('triggerswitch.utils', level='WARNING'):
            gate = TriggerGate('AccountSource', provider=provider)
        self.assertTrue(gate.is_enabled())

    @override_settings(TRIGGER_SETTINGS={'PROVIDER': 'triggerswitch.providers.DoesNotExist'})
    def test_misconfigured_provider_fails_open(self):
        """Test an unimportable PROVIDER resolves to enabled."""
        with self.assertLogs('triggerswitch.utils', level='WARNING'):
            gate = TriggerGate('AccountSource')
        self.assertTrue(gate.is_enabled())


class IsSourceEnabledTests(TestCase):
    """Tests for the stateless is_source_enabled() helper."""

    def test_matches_gate_resolution(self):
        """Test is_source_enabled() resolves like the gate."""
        TriggerSetting.objects.create(name='AccountSource', enabled=False)
        self.assertFalse(is_source_enabled('AccountSource'))
        self.assertTrue(is_source_enabled('ContactSource'))

    def test_no_caching_between_calls(self):
        """Test every call asks the provider again."""
        provider = StubProvider(True)
        is_source_enabled('AccountSource', provider=provider)
        is_source_enabled('AccountSource', provider=provider)
        self.assertEqual(provider.calls, ['AccountSource', 'AccountSource'])

    def test_sees_latest_value(self):
        """Test a changed row is seen by the next call."""
        setting = TriggerSetting.objects.create(name='AccountSource', enabled=True)
        self.assertTrue(is_source_enabled('AccountSource'))
        setting.enabled = False
        setting.save()
        self.assertFalse(is_source_enabled('AccountSource'))

    def test_error_fails_open(self):
        """Test a provider error resolves to enabled."""
        provider = StubProvider(error=ConfigLookupError('AccountSource'))
        with self.assertLogs('triggerswitch.utils', level='WARNING'):
            self.assertTrue(is_source_enabled('AccountSource', provider=provider))


class SideEffectHandler(TriggerHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.touched = []

    def before_create(self, new_records):
        if not self.is_enabled():
            return
        self.touched.extend(new_records)


class TriggerHandlerTests(TestCase):
    """Tests for TriggerHandler and the documented scenarios."""

    def test_disabled_source_skips_guarded_logic(self):
        """A guarded before_create does nothing when its source is disabled."""
        TriggerSetting.objects.create(name='AccountSource', enabled=False)
        handler = SideEffectHandler('AccountSource')

        self.assertFalse(handler.is_enabled())
        handler.before_create(['record'])
        self.assertEqual(handler.touched, [])

    def test_unconfigured_source_runs_guarded_logic(self):
        """Test a source without a row runs guarded logic."""
        handler = SideEffectHandler('ContactSource')

        self.assertTrue(handler.is_enabled())
        handler.before_create(['record'])
        self.assertEqual(handler.touched, ['record'])

    def test_failing_provider_runs_guarded_logic(self):
        """Test a failing provider leaves the handler enabled."""
        with self.assertLogs('triggerswitch.utils', level='WARNING'):
            handler = SideEffectHandler(
                'ContactSource', provider=StubProvider(error=RuntimeError('down'))
            )
        self.assertTrue(handler.is_enabled())

    def test_class_level_source_name(self):
        """Test source_name can be set on the handler class."""
        class AccountHandler(TriggerHandler):
            source_name = 'AccountSource'

        handler = AccountHandler(provider=StubProvider(False))
        self.assertEqual(handler.source_name, 'AccountSource')
        self.assertEqual(handler.gate.source_name, 'AccountSource')
        self.assertFalse(handler.is_enabled())

    def test_constructor_source_name_wins(self):
        """Test the constructor source name overrides the class attribute."""
        class AccountHandler(TriggerHandler):
            source_name = 'AccountSource'

        provider = StubProvider(True)
        handler = AccountHandler('OtherSource', provider=provider)
        self.assertEqual(handler.source_name, 'OtherSource')
        self.assertEqual(provider.calls, ['OtherSource'])

    def test_missing_source_name_rejected(self):
        """Test a handler without any source name is rejected."""
        with self.assertRaises(ValueError):
            TriggerHandler()

    def test_default_callbacks_are_noops(self):
        """Test every default callback does nothing."""
        handler = TriggerHandler('AccountSource', provider=StubProvider(True))
        self.assertIsNone(handler.before_create([]))
        self.assertIsNone(handler.before_update({}, {}))
        self.assertIsNone(handler.before_delete({}))
        self.assertIsNone(handler.after_create([]))
        self.assertIsNone(handler.after_update({}, {}))
        self.assertIsNone(handler.after_delete({}))
        self.assertIsNone(handler.after_restore([]))
