"""Application services for identity management."""

from nucleus_identity.application.services.account_manager import AccountManager

__all__ = ["AccountManager"]
