"""Room membership, posts and announcements backend."""

__version__ = "1.0.0"
