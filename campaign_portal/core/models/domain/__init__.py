from .enums import (
    AmaStatus,
    ChallengeStatus,
    ComplaintStatus,
    ContactStatus,
    ContentStatus,
    ContentType,
    EmergencyStatus,
    MediaKind,
    ModerationStatus,
    OrderStatus,
    Priority,
    PromiseStatus,
    UserRole,
    VoteTarget,
    VoteType,
)

__all__ = [
    "AmaStatus",
    "ChallengeStatus",
    "ComplaintStatus",
    "ContactStatus",
    "ContentStatus",
    "ContentType",
    "EmergencyStatus",
    "MediaKind",
    "ModerationStatus",
    "OrderStatus",
    "Priority",
    "PromiseStatus",
    "UserRole",
    "VoteTarget",
    "VoteType",
]
