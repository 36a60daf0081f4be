from triggerswitch.db.models.base import BaseModel, SoftDeleteModel

__all__ = ['BaseModel', 'SoftDeleteModel']
