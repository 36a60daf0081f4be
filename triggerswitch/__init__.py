"""
Trigger Switch.

Record-change triggers for Django models with a per-trigger on/off switch
stored as configuration.

Usage:
    from triggerswitch.handlers import TriggerHandler
    from triggerswitch.registry import registry

    @registry.register(Account, source_name='AccountTrigger')
    class AccountTriggerHandler(TriggerHandler):
        def before_create(self, new_records):
            if not self.is_enabled():
                return
            for account in new_records:
                account.name = account.name.strip()

    # Switch the trigger off without a deploy:
    TriggerSetting.objects.create(name='AccountTrigger', enabled=False)
"""
