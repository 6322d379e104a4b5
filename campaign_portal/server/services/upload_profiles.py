"""
Upload scopes.

Each public or console upload surface (media library, emergency audio,
volunteer photos, testimonial media, challenge and complaint attachments)
is described by an :class:`UploadProfile`: which MIME types it accepts, the
size limit per kind of file, who may use it, and how object keys are laid
out in the bucket.
"""

from __future__ import annotations

import mimetypes
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from typing import Dict, FrozenSet, Mapping, Optional

from campaign_portal.core.models.domain.enums import MediaKind
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core.constant import MB


class UploadRejected(ValueError):
    """The file cannot be accepted by this upload scope."""


_EXTENSION_MIME = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "mov": "video/quicktime",
    "avi": "video/avi",
    "mp3": "audio/mpeg",
    "m4a": "audio/mp4",
    "ogg": "audio/ogg",
    "wav": "audio/wav",
    "pdf": "application/pdf",
}


def mime_from_filename(filename: str) -> str:
    """MIME type guessed from the extension, ``application/octet-stream`` if unknown."""
    ext = PurePosixPath(filename).suffix.lower().lstrip(".")
    if ext in _EXTENSION_MIME:
        return _EXTENSION_MIME[ext]
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def unique_filename(original: str, content_type: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Collision-free object name: ``{epoch_ms}-{uuid8}-{safe-stem}.{ext}``.

    The stem keeps ASCII letters and digits only (other characters become
    ``-``) and is capped at 30 characters.
    """
    now = now or utc_now()
    path = PurePosixPath(original or "file")
    ext = path.suffix.lower().lstrip(".")
    if not ext and content_type:
        guessed = mimetypes.guess_extension(content_type) or ""
        ext = guessed.lstrip(".")
    stem = re.sub(r"[^a-zA-Z0-9]", "-", path.stem)[:30].strip("-") or "file"
    timestamp = int(now.timestamp() * 1000)
    name = f"{timestamp}-{uuid.uuid4().hex[:8]}-{stem}"
    return f"{name}.{ext}" if ext else name


@dataclass(frozen=True)
class UploadProfile:
    """
    Rules for one upload scope.

    Attributes:
        scope: URL name of the scope
        key_prefix: Top-level folder in the bucket
        accepted: MIME types per kind; ``"audio/*"`` style wildcards allowed
        max_sizes: Byte limit per kind
        staff_only: Requires an admin or moderator session
        record_media: Completed uploads are added to the media library
        kind_folders: Insert ``{kind}s/`` after the prefix
        day_folders: Use ``YYYY/MM/DD`` instead of ``YYYY/MM``
    """

    scope: str
    key_prefix: str
    accepted: Mapping[MediaKind, FrozenSet[str]]
    max_sizes: Mapping[MediaKind, int]
    staff_only: bool = False
    record_media: bool = False
    kind_folders: bool = True
    day_folders: bool = False
    max_files: int = field(default=10)

    @property
    def accepted_types(self) -> list[str]:
        return sorted(mime for types in self.accepted.values() for mime in types)

    def kind_for(self, content_type: str) -> Optional[MediaKind]:
        content_type = (content_type or "").lower().split(";")[0].strip()
        for kind, types in self.accepted.items():
            for accepted in types:
                if accepted.endswith("/*"):
                    if content_type.startswith(accepted[:-1]):
                        return kind
                elif content_type == accepted:
                    return kind
        return None

    def validate(self, content_type: str, size: int) -> MediaKind:
        """
        Check type and size, returning the kind of file.

        Raises:
            UploadRejected: unsupported type, empty file or over the kind's limit
        """
        kind = self.kind_for(content_type)
        if kind is None:
            raise UploadRejected(
                f"Unsupported file type '{content_type}'. Allowed: {', '.join(self.accepted_types)}"
            )
        if size <= 0:
            raise UploadRejected("File is empty")
        limit = self.max_sizes[kind]
        if size > limit:
            raise UploadRejected(f"{kind.value.capitalize()} exceeds the {limit // MB}MB limit")
        return kind

    def object_key(self, kind: MediaKind, filename: str, now: Optional[datetime] = None) -> str:
        now = now or utc_now()
        parts = [self.key_prefix]
        if self.kind_folders:
            parts.append(f"{kind.value}s")
        parts.extend([f"{now:%Y}", f"{now:%m}"])
        if self.day_folders:
            parts.append(f"{now:%d}")
        parts.append(filename)
        return "/".join(parts)

    def owns_key(self, key: str) -> bool:
        """True when ``key`` lives under this scope's prefix (and has no traversal)."""
        return key.startswith(f"{self.key_prefix}/") and ".." not in key.split("/")


_IMAGES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"})
_WEB_IMAGES = frozenset({"image/jpeg", "image/png", "image/webp"})

PROFILES: Dict[str, UploadProfile] = {
    "media": UploadProfile(
        scope="media",
        key_prefix="media",
        accepted={
            MediaKind.image: _IMAGES,
            MediaKind.video: frozenset({"video/mp4", "video/mov", "video/avi", "video/quicktime", "video/x-msvideo"}),
        },
        max_sizes={MediaKind.image: 20 * MB, MediaKind.video: 100 * MB},
        staff_only=True,
        record_media=True,
        max_files=20,
    ),
    "emergency": UploadProfile(
        scope="emergency",
        key_prefix="emergency-audio",
        accepted={MediaKind.audio: frozenset({"audio/*"})},
        max_sizes={MediaKind.audio: 100 * MB},
        kind_folders=False,
        day_folders=True,
        max_files=1,
    ),
    "volunteer": UploadProfile(
        scope="volunteer",
        key_prefix="volunteer",
        accepted={MediaKind.image: _WEB_IMAGES},
        max_sizes={MediaKind.image: 2 * MB},
        kind_folders=False,
        max_files=1,
    ),
    "testimonials": UploadProfile(
        scope="testimonials",
        key_prefix="testimonials",
        accepted={
            MediaKind.image: frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"}),
            MediaKind.video: frozenset({"video/mp4", "video/webm", "video/quicktime", "video/x-msvideo"}),
        },
        max_sizes={MediaKind.image: 10 * MB, MediaKind.video: 200 * MB},
        max_files=2,
    ),
    "challenges": UploadProfile(
        scope="challenges",
        key_prefix="challenges",
        accepted={MediaKind.image: frozenset({"image/*"}), MediaKind.video: frozenset({"video/*"})},
        max_sizes={MediaKind.image: 200 * MB, MediaKind.video: 200 * MB},
        max_files=5,
    ),
    "complaints": UploadProfile(
        scope="complaints",
        key_prefix="complaints",
        accepted={
            MediaKind.image: frozenset({"image/*"}),
            MediaKind.video: frozenset({"video/*"}),
            MediaKind.document: frozenset({"application/pdf"}),
        },
        max_sizes={MediaKind.image: 200 * MB, MediaKind.video: 200 * MB, MediaKind.document: 200 * MB},
        max_files=10,
    ),
}


def get_profile(scope: str) -> Optional[UploadProfile]:
    return PROFILES.get(scope)
