"""Domain enums for the campaign portal."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Role column on the users table; admin and moderator are staff."""

    admin = "admin"  # Full access including user management.
    moderator = "moderator"  # Content and inbox management.
    user = "user"  # Registered visitor without console access.


class ContentType(str, Enum):
    """Which content section a shared category belongs to."""

    events = "events"
    news = "news"
    photos = "photos"
    videos = "videos"


class ContentStatus(str, Enum):
    """Publishing state of CMS content."""

    draft = "draft"
    published = "published"


class PromiseStatus(str, Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    completed = "completed"
    delayed = "delayed"


class ModerationStatus(str, Enum):
    """Review state of visitor-submitted testimonials."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class AmaStatus(str, Enum):
    pending = "pending"  # Awaiting moderation, hidden from the public.
    approved = "approved"  # Public, not yet answered.
    answered = "answered"  # Public with an answer.
    rejected = "rejected"
    flagged = "flagged"


class VoteType(str, Enum):
    upvote = "upvote"
    downvote = "downvote"


class VoteTarget(str, Enum):
    question = "question"
    answer = "answer"


class ComplaintStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    under_review = "under_review"
    responded = "responded"
    resolved = "resolved"
    rejected = "rejected"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class ContactStatus(str, Enum):
    pending = "pending"
    read = "read"
    replied = "replied"
    archived = "archived"


class OrderStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class ChallengeStatus(str, Enum):
    """Stored challenge state; the public view derives upcoming/ended from the window."""

    draft = "draft"
    active = "active"
    closed = "closed"
    archived = "archived"


class EmergencyStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"


class MediaKind(str, Enum):
    """Broad file category used to choose size limits and key prefixes."""

    image = "image"
    video = "video"
    audio = "audio"
    document = "document"
