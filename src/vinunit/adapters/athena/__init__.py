"""Public interface for the Athena adapter."""

from __future__ import annotations

from .client import AthenaQueryService

__all__ = ["AthenaQueryService"]
