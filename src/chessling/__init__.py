"""Chess rules engine: legal moves, check detection and SAN notation."""

__version__ = "0.1.0"
