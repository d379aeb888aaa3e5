"""CMS API clients."""

from .cms_client import CMSClient

__all__ = ["CMSClient"]
