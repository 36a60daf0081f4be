"""
Helpers shared by the triggerswitch tests.
"""
from triggerswitch.handlers import TriggerHandler
from triggerswitch.providers import BaseConfigProvider


class StubProvider(BaseConfigProvider):
    """Provider returning a fixed value (or raising) and recording calls."""

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.calls = []

    def lookup(self, source_name):
        self.calls.append(source_name)
        if self.error is not None:
            raise self.error
        return self.value


class RecordingHandler(TriggerHandler):
    """Handler that records every guarded callback into a class-level list."""
    events = []

    def _record(self, event, *args):
        if not self.is_enabled():
            return
        RecordingHandler.events.append((event, id(self), args))

    def before_create(self, new_records):
        self._record('before_create', list(new_records))

    def before_update(self, old_by_key, new_by_key):
        self._record('before_update', dict(old_by_key), dict(new_by_key))

    def before_delete(self, old_by_key):
        self._record('before_delete', dict(old_by_key))

    def after_create(self, new_records):
        self._record('after_create', list(new_records))

    def after_update(self, old_by_key, new_by_key):
        self._record('after_update', dict(old_by_key), dict(new_by_key))

    def after_delete(self, old_by_key):
        self._record('after_delete', dict(old_by_key))

    def after_restore(self, restored_records):
        self._record('after_restore', list(restored_records))


def event_names():
    return [event for event, _, _ in RecordingHandler.events]
