"""rental_db — PostgreSQL persistence for needs-assessment questions and responses.

ORM models, the async engine factory and repositories used by the FastAPI
server and the ``rental-seed`` CLI.
"""

from rental_db.engine import get_engine, get_session_factory
from rental_db.models.enums import MANAGER_ROLES, STAFF_ROLES, UserRole
from rental_db.models.question import NeedsAssessmentQuestion
from rental_db.models.response import NeedsAssessmentResponse
from rental_db.repository import QuestionRepository, ResponseRepository

__all__ = [
    "NeedsAssessmentQuestion",
    "NeedsAssessmentResponse",
    "UserRole",
    "STAFF_ROLES",
    "MANAGER_ROLES",
    "get_engine",
    "get_session_factory",
    "QuestionRepository",
    "ResponseRepository",
]
