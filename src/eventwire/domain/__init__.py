"""Domain types and pure rules for eventwire."""
