"""Multi-tenant todo tracking API."""
