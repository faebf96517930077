"""Infrastructure layer: cache backends and the carrier boundary.

May import from domain. Must never import from services or commands.
"""
