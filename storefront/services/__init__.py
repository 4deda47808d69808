"""Domain operations called by the route handlers."""
