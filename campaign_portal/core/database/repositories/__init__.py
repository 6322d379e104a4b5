from .base import AsyncRepository, QueryBuilder, count_rows, fetch_page

__all__ = ["AsyncRepository", "QueryBuilder", "count_rows", "fetch_page"]
