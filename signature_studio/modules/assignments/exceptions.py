"""Assignment domain specific exceptions."""

from signature_studio.core.errors import DuplicateRecordError, NotFoundError


class AssignmentExistsError(DuplicateRecordError):
    code = "ASSIGNMENT_EXISTS"
    message = "Template is already assigned to this user"


class AllAssignmentsExistError(DuplicateRecordError):
    code = "ALL_ASSIGNMENTS_EXIST"
    message = "Template is already assigned to all selected users"


class UsersNotFoundError(NotFoundError):
    code = "USERS_NOT_FOUND"
    message = "One or more users not found"


class AssignmentsNotFoundError(NotFoundError):
    code = "ASSIGNMENTS_NOT_FOUND"
    message = "One or more assignments not found"
