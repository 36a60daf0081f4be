"""
The lifecycle callbacks a trigger handler may implement.

Every method is a no-op by default, so a handler only overrides the stages
it cares about. Create and restore stages receive a list of records; update
and delete stages receive records keyed by primary key. In update stages a
key present in old_by_key but missing from new_by_key was deleted in this
batch, and a key only in new_by_key was inserted.
"""
from triggerswitch.types import RecordList, RecordMap


class EventCallbacks:
    """Capability interface with one method per record lifecycle stage."""

    def before_create(self, new_records: RecordList) -> None:
        pass

    def before_update(self, old_by_key: RecordMap, new_by_key: RecordMap) -> None:
        pass

    def before_delete(self, old_by_key: RecordMap) -> None:
        pass

    def after_create(self, new_records: RecordList) -> None:
        pass

    def after_update(self, old_by_key: RecordMap, new_by_key: RecordMap) -> None:
        pass

    def after_delete(self, old_by_key: RecordMap) -> None:
        pass

    def after_restore(self, restored_records: RecordList) -> None:
        pass
