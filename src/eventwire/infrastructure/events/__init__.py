"""Listener registry, dispatch engine and emitter surfaces."""
