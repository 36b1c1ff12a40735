"""
Shared infrastructure for the HRMIS portal client.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory and session persistence
- exceptions: Base exception classes
- models: The cached Session model

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import FileSessionStorage, get_supabase_client, reset_client_cache
from .exceptions import (
    PortalError,
    ValidationError,
    AuthenticationError,
    ExternalServiceError,
)
from .models import Session

__all__ = [
    "Settings",
    "get_settings",
    "FileSessionStorage",
    "get_supabase_client",
    "reset_client_cache",
    "PortalError",
    "ValidationError",
    "AuthenticationError",
    "ExternalServiceError",
    "Session",
]
