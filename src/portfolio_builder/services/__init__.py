"""Business logic called by the route handlers."""
