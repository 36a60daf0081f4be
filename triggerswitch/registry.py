"""
Registry that wires trigger handlers to model signals.

Each registered model gets one entry trigger: Django's save and delete
signals plus the soft-delete and restore signals are routed to a fresh
handler per save(), delete(), soft_delete() or restore() call. Register
handlers in a ``triggers.py`` module of any installed app; they are
imported at startup by autodiscover().

Usage:
    from triggerswitch.registry import registry
    from triggerswitch.handlers import TriggerHandler

    @registry.register(Account, source_name='AccountTrigger')
    class AccountTriggerHandler(TriggerHandler):
        def before_create(self, new_records):
            if not self.is_enabled():
                return
            ...
"""
import logging
from typing import Dict, Iterable, Optional, Type

from django.db import models
from django.db.models.signals import pre_save, post_save, pre_delete, post_delete

from triggerswitch.dispatch import TriggerContext, TriggerDispatcher
from triggerswitch.exceptions import AlreadyRegistered, NotRegistered
from triggerswitch.handlers import TriggerHandler
from triggerswitch.signals import pre_soft_delete, post_soft_delete, post_restore
from triggerswitch.types import (
    RecordKey,
    RecordMap,
    TriggerEvent,
    TriggerInvocationTypedDict,
)

logger = logging.getLogger(__name__)

# Instance attribute holding in-flight invocations, keyed by binding uid
INVOCATIONS_ATTR = '_triggerswitch_invocations'


class TriggerBinding:
    """The entry trigger for one model: its handler class and signal receivers."""

    def __init__(
        self,
        model: Type[models.Model],
        handler_class: Type[TriggerHandler],
        source_name: str,
        uid: str
    ):
        self.model = model
        self.handler_class = handler_class
        self.source_name = source_name
        self.uid = uid

    def _receivers(self):
        return (
            (pre_save, self.on_pre_save),
            (post_save, self.on_post_save),
            (pre_delete, self.on_pre_delete),
            (post_delete, self.on_post_delete),
            (pre_soft_delete, self.on_pre_delete),
            (post_soft_delete, self.on_post_delete),
            (post_restore, self.on_post_restore),
        )

    def _dispatch_uid(self, signal, receiver) -> str:
        return f"{self.uid}:{id(signal):x}:{receiver.__name__}"

    def connect(self) -> None:
        for signal, receiver in self._receivers():
            signal.connect(
                receiver, sender=self.model, weak=False,
                dispatch_uid=self._dispatch_uid(signal, receiver)
            )

    def disconnect(self) -> None:
        for signal, receiver in self._receivers():
            signal.disconnect(
                sender=self.model,
                dispatch_uid=self._dispatch_uid(signal, receiver)
            )

    def make_handler(self) -> TriggerHandler:
        return self.handler_class(source_name=self.source_name)

    def run(
        self,
        event: TriggerEvent,
        *,
        new_records: Iterable[models.Model] = (),
        old_by_key: Optional[RecordMap] = None,
        new_by_key: Optional[RecordMap] = None,
        handler: Optional[TriggerHandler] = None
    ) -> bool:
        """
        Dispatch one notification to a handler for this model.

        A new handler, and so a new setting lookup, is created unless one
        is passed in.

        Returns:
            True if the callback ran, False if the trigger is disabled
        """
        if handler is None:
            handler = self.make_handler()
        context = TriggerContext(
            event=event,
            new_records=tuple(new_records),
            old_by_key=dict(old_by_key or {}),
            new_by_key=dict(new_by_key or {}),
        )
        return TriggerDispatcher(handler).dispatch(context)

    def _remember(
        self,
        instance: models.Model,
        handler: TriggerHandler,
        old_by_key: Dict[RecordKey, models.Model]
    ) -> None:
        invocations = instance.__dict__.setdefault(INVOCATIONS_ATTR, {})
        invocations[self.uid] = TriggerInvocationTypedDict(
            handler=handler, old_by_key=old_by_key
        )

    def _forget(self, instance: models.Model) -> Optional[TriggerInvocationTypedDict]:
        return instance.__dict__.get(INVOCATIONS_ATTR, {}).pop(self.uid, None)

    def on_pre_save(self, sender, instance, raw=False, **kwargs):
        # Fixture loading saves raw rows; triggers do not run for those
        if raw:
            return
        handler = self.make_handler()

        if instance._state.adding:
            self._remember(instance, handler, {})
            self.run('before_create', new_records=[instance], handler=handler)
            return

        old_by_key: Dict[RecordKey, models.Model] = {}
        if handler.is_enabled():
            old = sender._base_manager.filter(pk=instance.pk).first()
            if old is not None:
                old_by_key[instance.pk] = old
        self._remember(instance, handler, old_by_key)
        self.run(
            'before_update',
            old_by_key=old_by_key,
            new_by_key={instance.pk: instance},
            handler=handler
        )

    def on_post_save(self, sender, instance, created=False, raw=False, **kwargs):
        if raw:
            return
        invocation = self._forget(instance)
        handler = invocation['handler'] if invocation else None

        if created:
            self.run('after_create', new_records=[instance], handler=handler)
            return

        old_by_key = invocation['old_by_key'] if invocation else {}
        self.run(
            'after_update',
            old_by_key=old_by_key,
            new_by_key={instance.pk: instance},
            handler=handler
        )

    def on_pre_delete(self, sender, instance, **kwargs):
        handler = self.make_handler()
        old_by_key = {instance.pk: instance}
        self._remember(instance, handler, old_by_key)
        self.run('before_delete', old_by_key=old_by_key, handler=handler)

    def on_post_delete(self, sender, instance, **kwargs):
        invocation = self._forget(instance)
        if invocation:
            self.run(
                'after_delete',
                old_by_key=invocation['old_by_key'],
                handler=invocation['handler']
            )
        else:
            self.run('after_delete', old_by_key={instance.pk: instance})

    def on_post_restore(self, sender, instance, **kwargs):
        self.run('after_restore', new_records=[instance])


class TriggerRegistry:
    """Registry of trigger handlers, one per model."""

    def __init__(self):
        self._registry: Dict[Type[models.Model], TriggerBinding] = {}

    def register(self, model: Type[models.Model], source_name: Optional[str] = None):
        """
        Decorator to register a trigger handler for a model class.

        Args:
            model: The model class whose record changes are handled
            source_name: Trigger setting name. Defaults to the handler's
                source_name attribute, then to '<ModelName>Trigger'.

        Returns:
            A decorator function that registers the handler class.
        """
        def decorator(handler_class):
            self.add(model, handler_class, source_name=source_name)
            return handler_class
        return decorator

    def add(
        self,
        model: Type[models.Model],
        handler_class: Type[TriggerHandler],
        source_name: Optional[str] = None
    ) -> TriggerBinding:
        """Register handler_class for model and connect its signals."""
        if model in self._registry:
            raise AlreadyRegistered(
                f"The model {model.__name__} already has a trigger handler "
                f"({self._registry[model].handler_class.__name__})"
            )
        source_name = (
            source_name
            or handler_class.source_name
            or f"{model.__name__}Trigger"
        )
        binding = TriggerBinding(
            model=model,
            handler_class=handler_class,
            source_name=source_name,
            uid=f"triggerswitch.{id(self):x}.{model._meta.label_lower}",
        )
        binding.connect()
        self._registry[model] = binding
        logger.debug(
            f"Registered trigger '{source_name}' for {model._meta.label} "
            f"({handler_class.__name__})"
        )
        return binding

    def unregister(self, model: Type[models.Model]) -> None:
        binding = self._registry.pop(model, None)
        if binding is None:
            raise NotRegistered(f"The model {model.__name__} has no trigger handler")
        binding.disconnect()

    def is_registered(self, model: Type[models.Model]) -> bool:
        return model in self._registry

    def get(self, model: Type[models.Model]) -> Optional[TriggerBinding]:
        """Get the binding for a model class."""
        return self._registry.get(model)

    def get_registered_sources(self) -> Dict[str, Type[models.Model]]:
        """Return a mapping of trigger source name to model class."""
        return {
            binding.source_name: model
            for model, binding in self._registry.items()
        }

    def run(self, model: Type[models.Model], event: TriggerEvent, **kwargs) -> bool:
        """
        Dispatch a notification for model outside of its signals.

        bulk_create(), QuerySet.update() and similar calls do not send model
        signals. Callers that use them fire the batch themselves:

            accounts = Account.objects.bulk_create(accounts)
            registry.run(Account, 'after_create', new_records=accounts)

        QuerySet.delete() does send pre_delete and post_delete, but once per
        row: each row gets its own handler and setting lookup, and the
        callbacks see one-record batches. A setting edited while the delete
        runs can therefore apply to some rows and not others.
        Handlers that need the whole set of deleted rows at once cannot get
        it from these per-row callbacks.
        """
        binding = self._registry.get(model)
        if binding is None:
            raise NotRegistered(f"The model {model.__name__} has no trigger handler")
        return binding.run(event, **kwargs)


registry = TriggerRegistry()
