"""Authentication module."""

from .models import AuthSession, RegistrationInput

__all__ = ["AuthSession", "RegistrationInput"]
