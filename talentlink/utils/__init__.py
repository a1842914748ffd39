"""Small helpers shared by the routes."""
