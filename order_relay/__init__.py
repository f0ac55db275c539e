"""
Order Relay - HTTP facade over a commerce backend with push fan-out.

This package exposes order, product and customer views over an external
commerce API and forwards new-order events to registered mobile devices.
"""

__version__ = "0.1.0"
