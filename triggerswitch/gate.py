from typing import Optional

from triggerswitch.providers import BaseConfigProvider
from triggerswitch.utils import is_source_enabled


class TriggerGate:
    """
    Enabled flag for one trigger source, resolved once.

    The provider is asked a single time, during construction. Later edits to
    the stored setting do not affect an existing gate, so a gate should live
    no longer than the invocation that created it.

    Usage:
        gate = TriggerGate('AccountTrigger')
        if gate.is_enabled():
            ...
    """

    def __init__(
        self,
        source_name: str,
        provider: Optional[BaseConfigProvider] = None
    ):
        if not source_name:
            raise ValueError("TriggerGate requires a non-empty source_name")
        self._source_name = source_name
        self._enabled = is_source_enabled(source_name, provider=provider)

    @property
    def source_name(self) -> str:
        return self._source_name

    def is_enabled(self) -> bool:
        return self._enabled

    def __repr__(self):
        return f"<TriggerGate {self._source_name!r} enabled={self._enabled}>"
