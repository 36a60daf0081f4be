"""
Exceptions raised by triggerswitch.

Only the registry and dispatch errors reach callers. Configuration lookup
errors are raised by providers and absorbed by the gate, which then treats
the trigger as enabled.
"""


class TriggerSwitchError(Exception):
    """Base class for all triggerswitch errors."""


class ConfigLookupError(TriggerSwitchError):
    """A provider could not answer whether a trigger source is enabled."""

    def __init__(self, source_name: str, reason: str = ''):
        self.source_name = source_name
        self.reason = reason
        message = f"Could not look up trigger setting '{source_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedConfigError(ConfigLookupError):
    """The stored value for a trigger source is not a boolean."""


class UnknownTriggerEventError(TriggerSwitchError):
    def __init__(self, event: str):
        self.event = event
        super().__init__(f"Unknown trigger event '{event}'")


class AlreadyRegistered(TriggerSwitchError):
    pass


class NotRegistered(TriggerSwitchError):
    pass
