"""Services for the Catpoint security system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener'
]
