"""User domain specific exceptions."""

from signature_studio.core.errors import DuplicateRecordError, RelationConstraintError, ValidationFailedError


class EmailAlreadyRegisteredError(DuplicateRecordError):
    code = "EMAIL_EXISTS"
    message = "Email already registered"


class UserHasTemplatesError(RelationConstraintError):
    """Raised when deleting a user who still authors templates."""

    code = "USER_HAS_TEMPLATES"
    message = "Cannot delete user who has created templates"


class CannotDeleteSelfError(ValidationFailedError):
    code = "CANNOT_DELETE_SELF"
    message = "You cannot delete your own account"
