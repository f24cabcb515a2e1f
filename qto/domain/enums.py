"""
Domain enums.
Values are stored verbatim in the database and carried in session tokens.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles known to the access policy."""

    ADMIN = "Admin"
    PROJECT_MANAGER = "Project Manager"
    DATA_ENTRY = "Data Entry"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"
