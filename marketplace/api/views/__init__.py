from .ai_views import GeminiViewSet
from .category_views import CategoryViewSet
from .file_views import UploadedFileView
from .product_views import ProductViewSet

__all__ = ["CategoryViewSet", "ProductViewSet", "GeminiViewSet", "UploadedFileView"]
