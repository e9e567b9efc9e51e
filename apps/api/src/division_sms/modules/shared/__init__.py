"""
Shared building blocks used by every feature module.
"""

from division_sms.modules.shared.models import BaseModel, SoftDeleteMixin, pg_enum

__all__ = ["BaseModel", "SoftDeleteMixin", "pg_enum"]
