"""
Adapters package for Order Relay.

This package contains components for integrating with external APIs:
- Abstract interfaces for the commerce backend and push provider
- Concrete implementations for specific platforms
- Factory and registry for selecting implementations from settings
"""

from . import interfaces

from .factory import AdaptorFactory
from .registry import AdaptorRegistry

__all__ = [
    'interfaces',
    'AdaptorFactory',
    'AdaptorRegistry',
]
