"""Key encoding, value formats, hashing, slot routing and background tasks for a key-value store."""

__version__ = "0.1.0"