"""Application package root.

The Flask shell of the coffee brewing timer: recipe database, settings
store, navigation graph, page endpoints and the Picture-in-Picture
coordinator that the host platform drives through lifecycle endpoints.
"""

__all__ = [
]
