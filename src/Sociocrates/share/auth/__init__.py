from .AuthenticatedUser import AuthenticatedUser
from .IdentityAssertion import IdentityAssertion
from .PasswordHasher import PasswordHasher
from .PermissionGuard import PermissionGuard

__all__ = [
    "AuthenticatedUser",
    "IdentityAssertion",
    "PasswordHasher",
    "PermissionGuard",
]
