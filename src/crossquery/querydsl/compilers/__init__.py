from .base import BaseTranslator
from .document import DocumentTranslator, document_translator
from .relational import RelationalTranslator, relational_translator

__all__ = (
    "BaseTranslator",
    "DocumentTranslator",
    "document_translator",
    "RelationalTranslator",
    "relational_translator",
)
