"""
Base class for source schema adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ..records import SourceItemRecord
from ..registry import MappingRegistry
from ..translation.handlers import ItemHandler
from ..translation.translator import IdentityResolver, ItemTranslator


class SchemaAdapter(ABC):
    """Knows one source plugin's document layout.

    An adapter turns an already-parsed document into ``SourceItemRecord``s and
    supplies the identity resolver, handler list and header comments the
    shared translator and assembler need for that schema.
    """

    name: str = ""

    @abstractmethod
    def records(self, document: Mapping[str, Any], source_name: str) -> list[SourceItemRecord]:
        """Item records of ``document`` in declaration order."""

    @abstractmethod
    def identity(self) -> IdentityResolver:
        ...

    @abstractmethod
    def handlers(self) -> list[ItemHandler]:
        ...

    @abstractmethod
    def header(self, document: Mapping[str, Any], source_name: str) -> list[str]:
        """Comment lines written at the top of the converted document."""

    def translator(self, registry: MappingRegistry) -> ItemTranslator:
        return ItemTranslator(registry, self.identity(), self.handlers())
