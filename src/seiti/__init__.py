"""Go board leveling viewer: generated and leveled boards with animated stone moves."""
__version__ = "0.1.0"
