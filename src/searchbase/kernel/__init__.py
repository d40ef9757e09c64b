"""Kernel – errors, value objects and the state change observable."""
