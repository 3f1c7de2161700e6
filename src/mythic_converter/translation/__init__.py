"""
Schema translation: source item records in, MythicCrucible text out.
"""

from .assembler import OutputAssembler
from .batch import translate_batch, translate_batch_concurrently
from .builder import TargetItemBuilder
from .classifier import FieldClassifier, FieldKind
from .handlers import ItemHandler
from .parser import ParsedDocument, ParsedItem, TargetDocumentParser
from .translator import IdentityResolver, ItemIdentity, ItemTranslator

__all__ = [
    "FieldClassifier",
    "FieldKind",
    "IdentityResolver",
    "ItemHandler",
    "ItemIdentity",
    "ItemTranslator",
    "OutputAssembler",
    "ParsedDocument",
    "ParsedItem",
    "TargetDocumentParser",
    "TargetItemBuilder",
    "translate_batch",
    "translate_batch_concurrently",
]
