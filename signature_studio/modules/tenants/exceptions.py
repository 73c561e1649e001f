"""Tenant domain specific exceptions."""

from signature_studio.core.errors import DuplicateRecordError


class DomainAlreadyRegisteredError(DuplicateRecordError):
    code = "DOMAIN_EXISTS"
    message = "Organization domain already registered"
