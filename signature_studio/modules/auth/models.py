"""Inputs and results for authentication flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from signature_studio.core.security import TokenPair
from signature_studio.modules.tenants.models import Tenant
from signature_studio.modules.users.models import User


@dataclass(slots=True)
class RegistrationInput:
    organization_name: str
    domain: str
    email: str
    password: str = field(repr=False)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(slots=True)
class AuthSession:
    """Everything a login or registration hands back to the client."""

    user: User
    tenant: Tenant
    tokens: TokenPair
