"""Domain layer: read model, packing rules, and cache keys.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
