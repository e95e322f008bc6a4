"""Recency-ordered local branch picker."""

__version__ = "0.1.0"
