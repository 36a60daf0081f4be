from django.test import SimpleTestCase

from triggerswitch.dispatch import TRIGGER_EVENTS, TriggerContext, TriggerDispatcher
from triggerswitch.exceptions import UnknownTriggerEventError
from triggerswitch.tests.utils import RecordingHandler, StubProvider, event_names


class TriggerContextTests(SimpleTestCase):
    """Tests for TriggerContext."""

    def test_inserted_and_deleted_keys(self):
        """Test keys only in one map are reported as inserted or deleted."""
        context = TriggerContext(
            'before_update',
            old_by_key={1: 'a', 2: 'b'},
            new_by_key={2: 'b2', 3: 'c'},
        )
        self.assertEqual(context.inserted_keys(), {3})
        self.assertEqual(context.deleted_keys(), {1})

    def test_defaults(self):
        """Test an empty context has empty records and maps."""
        context = TriggerContext('after_create')
        self.assertEqual(tuple(context.new_records), ())
        self.assertEqual(dict(context.old_by_key), {})
        self.assertEqual(context.inserted_keys(), set())


class TriggerDispatcherTests(SimpleTestCase):
    """Tests for TriggerDispatcher."""

    def setUp(self):
        RecordingHandler.events = []

    def _dispatcher(self, enabled=True):
        return TriggerDispatcher(
            RecordingHandler('AccountSource', provider=StubProvider(enabled))
        )

    def test_routes_each_event(self):
        """Test each event reaches its callback with the right arguments."""
        dispatcher = self._dispatcher()
        old, new = {1: 'old'}, {1: 'new'}

        for event in TRIGGER_EVENTS:
            context = TriggerContext(
                event, new_records=['r'], old_by_key=old, new_by_key=new
            )
            self.assertTrue(dispatcher.dispatch(context))

        self.assertEqual(event_names(), list(TRIGGER_EVENTS))
        args = {event: event_args for event, _, event_args in RecordingHandler.events}
        self.assertEqual(args['before_create'], (['r'],))
        self.assertEqual(args['after_create'], (['r'],))
        self.assertEqual(args['before_update'], (old, new))
        self.assertEqual(args['after_update'], (old, new))
        self.assertEqual(args['before_delete'], (old,))
        self.assertEqual(args['after_delete'], (old,))
        self.assertEqual(args['after_restore'], (['r'],))

    def test_disabled_handler_is_skipped(self):
        """Test a disabled handler's callbacks are not called."""
        dispatcher = self._dispatcher(enabled=False)
        result = dispatcher.dispatch(TriggerContext('before_create', new_records=['r']))
        self.assertFalse(result)
        self.assertEqual(RecordingHandler.events, [])

    def test_unknown_event(self):
        """Test dispatching an unknown event raises."""
        dispatcher = self._dispatcher()
        with self.assertRaises(UnknownTriggerEventError):
            dispatcher.dispatch(TriggerContext('before_merge'))

    def test_unknown_event_checked_before_gate(self):
        """Test unknown events raise even when the handler is disabled."""
        dispatcher = self._dispatcher(enabled=False)
        with self.assertRaises(UnknownTriggerEventError):
            dispatcher.dispatch(TriggerContext('is_enabled'))

    def test_callback_errors_propagate(self):
        """Test errors raised by a callback reach the caller."""
        class FailingHandler(RecordingHandler):
            def before_delete(self, old_by_key):
                raise ValueError('cannot delete')

        dispatcher = TriggerDispatcher(
            FailingHandler('AccountSource', provider=StubProvider(True))
        )
        with self.assertRaisesMessage(ValueError, 'cannot delete'):
            dispatcher.dispatch(TriggerContext('before_delete', old_by_key={1: 'x'}))
