"""ORM models for rental_db."""

from rental_db.models.base import Base
from rental_db.models.enums import MANAGER_ROLES, STAFF_ROLES, CategoryType, UserRole
from rental_db.models.question import NeedsAssessmentQuestion
from rental_db.models.response import CLIENT_NUMBER_PREFIX, NeedsAssessmentResponse

__all__ = [
    "Base",
    "CategoryType",
    "UserRole",
    "STAFF_ROLES",
    "MANAGER_ROLES",
    "NeedsAssessmentQuestion",
    "NeedsAssessmentResponse",
    "CLIENT_NUMBER_PREFIX",
]
