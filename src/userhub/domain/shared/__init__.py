"""Shared domain utilities."""

from userhub.domain.shared.time import utc_now

__all__ = ["utc_now"]
