"""Template domain specific exceptions."""

from signature_studio.core.errors import RelationConstraintError


class TemplateHasAssignmentsError(RelationConstraintError):
    """Raised when deleting a template that is still assigned to users."""

    code = "TEMPLATE_HAS_ASSIGNMENTS"
    message = "Cannot delete template with active assignments"
