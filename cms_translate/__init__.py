"""Translation orchestration for the travel CMS."""

__version__ = "0.1.0"
