"""
Interfaces package for Order Relay adaptors.

Abstract contracts for the outbound collaborators: the commerce backend
that owns orders and products, the push notification provider, and the
durable store behind the device registry.
"""

from .order_source import OrderSourceInterface, APIStatus
from .push_provider import PushProvider
from .token_store import TokenStore

__all__ = [
    'OrderSourceInterface',
    'APIStatus',
    'PushProvider',
    'TokenStore',
]
