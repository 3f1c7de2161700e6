"""
MythicConverter - translate MMOItems and ItemsAdder item files into MythicCrucible items.
"""

from .adapters import ItemsAdderAdapter, MMOItemsAdapter, SchemaAdapter, get_adapter
from .config import ConverterConfig
from .convert import DocumentConversion, DocumentWriter, convert_document, convert_document_concurrently
from .exceptions import ConverterError, DocumentParseError, ItemTranslationError, RegistryLoadError
from .models import Annotation, AnnotationCategory, BatchResult, ItemResult, TargetItemRecord
from .records import SourceItemRecord
from .registry import ActiveRegistry, MappingRegistry

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("mythic-converter")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "ActiveRegistry",
    "Annotation",
    "AnnotationCategory",
    "BatchResult",
    "ConverterConfig",
    "ConverterError",
    "DocumentConversion",
    "DocumentParseError",
    "DocumentWriter",
    "ItemResult",
    "ItemTranslationError",
    "ItemsAdderAdapter",
    "MMOItemsAdapter",
    "MappingRegistry",
    "RegistryLoadError",
    "SchemaAdapter",
    "SourceItemRecord",
    "TargetItemRecord",
    "convert_document",
    "convert_document_concurrently",
    "get_adapter",
]
