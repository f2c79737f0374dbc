"""Infrastructure layer: the emitter engine and its native-surface adapter."""
