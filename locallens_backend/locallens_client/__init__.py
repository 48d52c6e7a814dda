# locallens_client/__init__.py
from .api import LocalLensClient, ApiError

__all__ = ['LocalLensClient', 'ApiError']
