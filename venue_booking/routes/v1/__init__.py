"""API v1 routers, mounted under /api/v1 by the application."""
