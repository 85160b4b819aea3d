"""Utility modules for API Adaptor."""

from .sanitizer import mask_sensitive_data, mask_headers, mask_secret

__all__ = [
    'mask_sensitive_data',
    'mask_headers',
    'mask_secret',
]
