from accounts.db.models.auth_identity import AuthIdentity
from accounts.db.models.user import User, ROLE_OWNER, ROLE_ADMIN, ROLE_MEMBER

__all__ = ["User", "AuthIdentity", "ROLE_OWNER", "ROLE_ADMIN", "ROLE_MEMBER"]
