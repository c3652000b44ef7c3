"""Gatehouse: session-authenticated members site with role-gated admin pages."""

__version__ = "0.1.0"
