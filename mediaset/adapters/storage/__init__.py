"""
Stockage des images de couverture.
"""

from mediaset.adapters.storage.image_service import ImageService
from mediaset.adapters.storage.local_storage import LocalImageStorage

__all__ = ["ImageService", "LocalImageStorage"]
