"""Adapters – concrete integrations behind the application ports."""
