"""
API I/O schemas.

One module per resource, each with Create/Update/Read style models, plus
``common`` for the response envelope.
"""

from .common import DeleteResult, EntityRead, Envelope, ErrorEnvelope, PaginationMeta

__all__ = ["DeleteResult", "EntityRead", "Envelope", "ErrorEnvelope", "PaginationMeta"]
