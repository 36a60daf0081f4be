"""
Tests for the sales trigger handlers.
"""
from django.core.exceptions import ValidationError
from django.db import transaction
from django.test import TestCase, override_settings

from triggerswitch.models import TriggerSetting
from triggerswitch.sales.models import Account, Contact, STATUS_INACTIVE


class AccountTriggerTests(TestCase):
    """Tests for AccountTriggerHandler."""

    def test_create_normalises_name_and_status(self):
        """Test new accounts get a stripped name and active status."""
        account = Account.objects.create(name='  Acme  ')
        account.refresh_from_db()
        self.assertEqual(account.name, 'Acme')
        self.assertEqual(account.status, 'active')

    def test_update_normalises_name(self):
        """Test updated account names are stripped."""
        account = Account.objects.create(name='Acme')
        account.name = ' Acme Corp '
        account.save()
        account.refresh_from_db()
        self.assertEqual(account.name, 'Acme Corp')

    def test_disabled_trigger_does_nothing(self):
        """Test a disabled AccountTrigger leaves records untouched."""
        TriggerSetting.objects.create(name='AccountTrigger', enabled=False)
        account = Account.objects.create(name='  Acme  ')
        account.refresh_from_db()
        self.assertEqual(account.name, '  Acme  ')
        self.assertIsNone(account.metadata)

    def test_delete_blocked_by_active_contacts(self):
        """Test accounts with active contacts cannot be deleted."""
        account = Account.objects.create(name='Acme')
        Contact.objects.create(first_name='Jane', account=account)

        with self.assertRaises(ValidationError):
            with transaction.atomic():
                account.delete()
        self.assertTrue(Account.objects.filter(pk=account.pk).exists())

    def test_delete_allowed_after_contacts_soft_deleted(self):
        """Test soft-deleted contacts do not block deletion."""
        account = Account.objects.create(name='Acme')
        contact = Contact.objects.create(first_name='Jane', account=account)
        contact.soft_delete()

        account.delete()

        self.assertFalse(Account.objects.filter(pk=account.pk).exists())
        contact.refresh_from_db()
        self.assertIsNone(contact.account_id)

    def test_delete_allowed_when_disabled(self):
        """Test the delete check is skipped when the trigger is disabled."""
        account = Account.objects.create(name='Acme')
        Contact.objects.create(first_name='Jane', account=account)
        TriggerSetting.objects.create(name='AccountTrigger', enabled=False)

        account.delete()
        self.assertFalse(Account.objects.filter(pk=account.pk).exists())

    def test_deactivating_account_deactivates_contacts(self):
        """Test deactivating an account deactivates only its contacts."""
        account = Account.objects.create(name='Acme')
        contact = Contact.objects.create(first_name='Jane', account=account)
        other = Contact.objects.create(first_name='John')

        account.metadata['status'] = dict(STATUS_INACTIVE)
        account.save()

        contact.refresh_from_db()
        other.refresh_from_db()
        self.assertEqual(contact.status, 'inactive')
        self.assertEqual(other.status, 'active')


class ContactTriggerTests(TestCase):
    """Tests for ContactTriggerHandler."""

    def test_create_normalises_email(self):
        """Test new contacts get a lowercased email and active status."""
        contact = Contact.objects.create(first_name='Jane', email=' Jane@Example.COM ')
        contact.refresh_from_db()
        self.assertEqual(contact.email, 'jane@example.com')
        self.assertEqual(contact.status, 'active')

    def test_email_change_keeps_previous(self):
        """Test changing the email keeps the previous one in metadata."""
        contact = Contact.objects.create(first_name='Jane', email='jane@example.com')
        contact.email = 'JANE@new.example.com'
        contact.save()

        contact.refresh_from_db()
        self.assertEqual(contact.email, 'jane@new.example.com')
        self.assertEqual(contact.metadata['previous_email'], 'jane@example.com')

    def test_unchanged_email_has_no_previous(self):
        """Test saves without an email change record no previous email."""
        contact = Contact.objects.create(first_name='Jane', email='jane@example.com')
        contact.title = 'CTO'
        contact.save()

        contact.refresh_from_db()
        self.assertNotIn('previous_email', contact.metadata)

    def test_partial_save_keeps_email_consistent(self):
        """A metadata-only save neither rewrites the email nor records a change."""
        account = Account.objects.create(name='Acme')
        setting = TriggerSetting.objects.create(name='ContactTrigger', enabled=False)
        contact = Contact.objects.create(
            first_name='Jane', email='Jane@Example.com', account=account
        )
        setting.delete()

        account.metadata['status'] = dict(STATUS_INACTIVE)
        account.save()

        contact.refresh_from_db()
        self.assertEqual(contact.email, 'Jane@Example.com')
        self.assertEqual(contact.status, 'inactive')
        self.assertNotIn('previous_email', contact.metadata)

    def test_restore_counts(self):
        """Test each restore increments restore_count."""
        contact = Contact.objects.create(first_name='Jane')
        for _ in range(2):
            contact.soft_delete()
            contact.restore()

        contact.refresh_from_db()
        self.assertFalse(contact.is_deleted)
        self.assertEqual(contact.metadata['restore_count'], 2)

    @override_settings(TRIGGER_SETTINGS={
        'PROVIDER': 'triggerswitch.providers.SettingsConfigProvider',
        'SOURCES': {'ContactTrigger': {'enabled': False}},
    })
    def test_disabled_in_settings(self):
        """Test ContactTrigger can be disabled from Django settings."""
        contact = Contact.objects.create(first_name='Jane', email='Jane@Example.com')
        contact.refresh_from_db()
        self.assertEqual(contact.email, 'Jane@Example.com')
        self.assertIsNone(contact.metadata)
