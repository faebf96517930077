"""Service layer: rate adaptation, caching, and the calculator facade.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
