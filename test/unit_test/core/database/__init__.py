"""Unit tests for the database layer in campaign_portal/core/database."""
