"""Configuration, errors and authentication."""
