from enum import Enum


class UserRole(str, Enum):
    """用户角色"""

    ADMIN = "admin"
    PARTICIPANT = "participant"
    OBSERVER = "observer"
