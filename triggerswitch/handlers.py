"""
Base class for trigger handlers.

A handler implements the EventCallbacks it needs and owns a TriggerGate for
its source. Overridden callbacks check the gate themselves:

    class AccountTriggerHandler(TriggerHandler):
        source_name = 'AccountTrigger'

        def before_create(self, new_records):
            if not self.is_enabled():
                return
            for account in new_records:
                account.name = account.name.strip()
"""
from typing import Optional

from triggerswitch.callbacks import EventCallbacks
from triggerswitch.gate import TriggerGate
from triggerswitch.providers import BaseConfigProvider


class TriggerHandler(EventCallbacks):
    # Default source name; the constructor argument takes precedence
    source_name: str = ''

    def __init__(
        self,
        source_name: Optional[str] = None,
        provider: Optional[BaseConfigProvider] = None
    ):
        self.gate = TriggerGate(source_name or self.source_name, provider=provider)
        self.source_name = self.gate.source_name

    def is_enabled(self) -> bool:
        return self.gate.is_enabled()
