"""
Trigger handlers for the sales models.

Both handlers can be switched off with a TriggerSetting row named after
their source, e.g. ``python manage.py trigger_settings disable AccountTrigger``.
"""
import logging
from django.core.exceptions import ValidationError

from triggerswitch.handlers import TriggerHandler
from triggerswitch.registry import registry
from triggerswitch.sales.models import (
    Account, Contact, STATUS_ACTIVE, STATUS_INACTIVE,
)

logger = logging.getLogger(__name__)


def _set_default_status(record) -> None:
    if record.metadata is None:
        record.metadata = {}
    record.metadata.setdefault('status', dict(STATUS_ACTIVE))


@registry.register(Account)
class AccountTriggerHandler(TriggerHandler):
    source_name = 'AccountTrigger'

    def before_create(self, new_records):
        if not self.is_enabled():
            return
        for account in new_records:
            account.name = account.name.strip()
            _set_default_status(account)

    def before_update(self, old_by_key, new_by_key):
        if not self.is_enabled():
            return
        for account in new_by_key.values():
            account.name = account.name.strip()

    def before_delete(self, old_by_key):
        if not self.is_enabled():
            return
        blocked = [
            account for account in old_by_key.values()
            if Contact.active.filter(account=account).exists()
        ]
        if blocked:
            names = ', '.join(str(account) for account in blocked)
            raise ValidationError(f"Accounts with active contacts cannot be deleted: {names}")

    def after_update(self, old_by_key, new_by_key):
        if not self.is_enabled():
            return
        # Deactivating an account deactivates its contacts
        deactivated = [
            key for key, account in new_by_key.items()
            if account.status == 'inactive'
            and key in old_by_key
            and old_by_key[key].status != 'inactive'
        ]
        if not deactivated:
            return
        for contact in Contact.active.filter(account_id__in=deactivated):
            contact.metadata = contact.metadata or {}
            contact.metadata['status'] = dict(STATUS_INACTIVE)
            contact.save(update_fields=['metadata', 'updated_at'])
        logger.info(f"Deactivated contacts of {len(deactivated)} account(s)")


@registry.register(Contact)
class ContactTriggerHandler(TriggerHandler):
    source_name = 'ContactTrigger'

    def before_create(self, new_records):
        if not self.is_enabled():
            return
        for contact in new_records:
            contact.email = contact.email.strip().lower()
            _set_default_status(contact)

    def before_update(self, old_by_key, new_by_key):
        if not self.is_enabled():
            return
        for key, contact in new_by_key.items():
            old = old_by_key.get(key)
            # Saves that leave the email alone (e.g. update_fields without
            # email) must not rewrite it or record a change
            if old is not None and old.email == contact.email:
                continue
            contact.email = contact.email.strip().lower()
            if old is not None and old.email and old.email != contact.email:
                contact.metadata = contact.metadata or {}
                contact.metadata['previous_email'] = old.email

    def after_restore(self, restored_records):
        if not self.is_enabled():
            return
        for contact in restored_records:
            contact.metadata = contact.metadata or {}
            contact.metadata['restore_count'] = contact.metadata.get('restore_count', 0) + 1
            # Queryset update: restoring must not fire the update triggers
            Contact.objects.filter(pk=contact.pk).update(metadata=contact.metadata)
