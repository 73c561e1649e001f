"""Template assignment module."""

from .exceptions import AllAssignmentsExistError, AssignmentExistsError, AssignmentsNotFoundError, UsersNotFoundError
from .models import BulkAssignResult, TemplateAssignment
from .repository import AssignmentRepository

__all__ = [
    "AllAssignmentsExistError",
    "AssignmentExistsError",
    "AssignmentRepository",
    "AssignmentsNotFoundError",
    "BulkAssignResult",
    "TemplateAssignment",
    "UsersNotFoundError",
]
