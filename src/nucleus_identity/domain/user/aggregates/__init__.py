from nucleus_identity.domain.user.aggregates.user import NIL_USER_ID, User

__all__ = ["NIL_USER_ID", "User"]
