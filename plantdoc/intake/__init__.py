from .factory import get_image_adapter
from .types import ImageInput

__all__ = ["get_image_adapter", "ImageInput"]
