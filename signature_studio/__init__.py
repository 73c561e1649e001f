"""Multi-tenant email signature management service."""

__version__ = "1.0.0"
