"""
Entry-trigger dispatch.

A TriggerContext describes one record-change notification. The
TriggerDispatcher forwards it to the matching callback of a handler, but
only when the handler's gate is enabled.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Set, Tuple

from triggerswitch.exceptions import UnknownTriggerEventError
from triggerswitch.handlers import TriggerHandler
from triggerswitch.types import RecordKey, RecordList, RecordMap, TriggerEvent

logger = logging.getLogger(__name__)

TRIGGER_EVENTS: Tuple[str, ...] = (
    'before_create',
    'before_update',
    'before_delete',
    'after_create',
    'after_update',
    'after_delete',
    'after_restore',
)


@dataclass(frozen=True)
class TriggerContext:
    """
    One record-change notification.

    Create and restore events use new_records. Update events use both maps
    and delete events use old_by_key.
    """
    event: TriggerEvent
    new_records: RecordList = field(default_factory=tuple)
    old_by_key: RecordMap = field(default_factory=dict)
    new_by_key: RecordMap = field(default_factory=dict)

    def inserted_keys(self) -> Set[RecordKey]:
        """Keys present only in new_by_key."""
        return set(self.new_by_key) - set(self.old_by_key)

    def deleted_keys(self) -> Set[RecordKey]:
        """Keys present only in old_by_key."""
        return set(self.old_by_key) - set(self.new_by_key)


# Positional arguments passed to each callback
_CALLBACK_ARGS: Dict[str, Callable[[TriggerContext], Tuple[Any, ...]]] = {
    'before_create': lambda ctx: (ctx.new_records,),
    'after_create': lambda ctx: (ctx.new_records,),
    'before_update': lambda ctx: (ctx.old_by_key, ctx.new_by_key),
    'after_update': lambda ctx: (ctx.old_by_key, ctx.new_by_key),
    'before_delete': lambda ctx: (ctx.old_by_key,),
    'after_delete': lambda ctx: (ctx.old_by_key,),
    'after_restore': lambda ctx: (ctx.new_records,),
}


class TriggerDispatcher:
    """
    Routes notifications to a handler's callbacks.

    Errors raised by a callback propagate to the caller, so the surrounding
    save or delete fails as a whole.

    Usage:
        dispatcher = TriggerDispatcher(AccountTriggerHandler())
        dispatcher.dispatch(TriggerContext('before_create', new_records=[account]))
    """

    def __init__(self, handler: TriggerHandler):
        self.handler = handler

    def dispatch(self, context: TriggerContext) -> bool:
        """
        Forward context to the handler callback for context.event.

        Returns:
            True if the callback ran, False if the handler is disabled

        Raises:
            UnknownTriggerEventError: If context.event is not a trigger event
        """
        if context.event not in _CALLBACK_ARGS:
            raise UnknownTriggerEventError(context.event)

        if not self.handler.is_enabled():
            logger.debug(
                f"Trigger '{self.handler.source_name}' is disabled, "
                f"skipping {context.event}"
            )
            return False

        callback = getattr(self.handler, context.event)
        callback(*_CALLBACK_ARGS[context.event](context))
        return True
