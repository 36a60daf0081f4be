from typing import Any, Dict, Hashable, Literal, Mapping, Sequence, TypedDict
from typing_extensions import NotRequired


# A record is a model instance; keys are primary key values
Record = Any
RecordKey = Hashable
RecordList = Sequence[Record]
RecordMap = Mapping[RecordKey, Record]

TriggerEvent = Literal[
    'before_create',
    'before_update',
    'before_delete',
    'after_create',
    'after_update',
    'after_delete',
    'after_restore',
]


class TriggerSourceTypedDict(TypedDict):
    enabled: bool
    description: NotRequired[str]


class TriggerSettingsTypedDict(TypedDict):
    PROVIDER: NotRequired[str]
    AUTODISCOVER: NotRequired[bool]
    SOURCES: NotRequired[Dict[str, TriggerSourceTypedDict]]


class TriggerInvocationTypedDict(TypedDict):
    """Per-save or per-delete state kept on the instance between signals."""
    handler: Any
    old_by_key: Dict[RecordKey, Record]
