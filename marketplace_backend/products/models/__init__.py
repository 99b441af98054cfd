"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .browsing_history import BrowsingHistory
from .product import Product

__all__ = ["BrowsingHistory", "Product"]
