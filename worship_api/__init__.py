"""Worship group management service: members, repertoire and rotation scales."""

__version__ = "1.0.0"
