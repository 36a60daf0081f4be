"""
Record-change signals that Django does not send itself.

Soft-deleted records stay in the table, so Django's pre_delete and
post_delete never fire for them. SoftDeleteModel sends these instead.
All three are sent with ``sender`` (the model class) and ``instance``.
"""
from django.dispatch import Signal

pre_soft_delete = Signal()
post_soft_delete = Signal()
post_restore = Signal()
