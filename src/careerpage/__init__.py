"""Career page composition and publish-lifecycle service."""

__version__ = "0.1.0"
