"""Domain layer for macrosnap."""
