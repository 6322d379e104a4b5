"""Application-wide constants."""

PROJECT_NAME = "Campaign Portal"
API_V1_STR = "/api/v1"
API_VERSION = "0.1.0"
SCHEMA_VERSION = "v1"

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Upload limits shared by every upload scope
MB = 1024 * 1024
MIN_MULTIPART_PART_SIZE = 5 * MB
DEFAULT_MULTIPART_PART_SIZE = 10 * MB
MAX_MULTIPART_PARTS = 10_000
CACHE_CONTROL_IMMUTABLE = "max-age=31536000"

# Chunked uploads: no more slots than the largest file of a scope needs at the
# smallest accepted chunk size, and never more than MAX_CHUNKS
MIN_CHUNK_SIZE = 64 * 1024
MAX_CHUNKS = 10_000
