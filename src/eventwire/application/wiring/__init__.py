"""Decorators and the construction-time resolver that applies them."""
