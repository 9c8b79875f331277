"""
FastAPI directory service.

Provides the public JSON API (resources, companies, news, reports,
badge) and the admin moderation endpoints.
"""

from butji.api.app import create_app

__all__ = ["create_app"]
