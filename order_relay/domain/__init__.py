"""
Domain package for Order Relay.

Holds the data structures the services operate on. Order records are
owned by the commerce platform and are handled as plain mappings; the
helpers in ``models.order`` read them defensively.
"""
