"""Database-level enumerations for the needs-assessment tables."""

import enum


class CategoryType(str, enum.Enum):
    """Value of ``needs_assessment_questions.category_type``."""

    GENERAL = "general"
    EQUIPMENT = "equipment"


class UserRole(str, enum.Enum):
    """Roles carried by the ``X-User-Role`` header.

    Clients have no role on staff endpoints; every role below is staff.
    """

    ADMIN = "admin"
    ELECTRICAL_MANAGER = "electrical_manager"
    TRANSPORT_MANAGER = "transport_manager"
    GENERAL_MANAGER = "general_manager"
    EMPLOYEE = "employee"


# May create staff responses and read client responses
STAFF_ROLES: frozenset[UserRole] = frozenset(UserRole)

# May list and read staff-created responses
MANAGER_ROLES: frozenset[UserRole] = frozenset({
    UserRole.ADMIN,
    UserRole.ELECTRICAL_MANAGER,
    UserRole.TRANSPORT_MANAGER,
    UserRole.GENERAL_MANAGER,
})
