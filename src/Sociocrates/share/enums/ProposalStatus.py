from enum import Enum


class ProposalStatus(str, Enum):
    """提案当前状态"""

    DRAFT = "draft"  # 草稿
    ACTIVE = "active"  # 议事中
    PENDING_CONSENT = "pending_consent"  # 待同意
    RESOLVED = "resolved"  # 已决议
    ARCHIVED = "archived"  # 已归档
