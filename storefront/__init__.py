"""
Storefront Cart Package

Client-side cart subsystem of the storefront:
- cart: cart store, persistence adapter, notification bus, order summary
- catalog: read-only product lookup
- models: Pydantic records exchanged with the catalog and checkout
- db: Upstash Redis client used for persistence
"""

__version__ = "1.0.0"
