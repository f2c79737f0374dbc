"""Application layer: declarative wiring of emitters."""
