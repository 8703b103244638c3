"""Index schema and entity mapping for the symbol index.

Every indexed symbol becomes one document with three fields:

- ``fqn``: the fully-qualified name, stored and analyzed with
  :func:`~symbol_index.search.analysis.FqnAnalyzer`; carries the boost
- ``file``: URI of the originating file, untokenized, used only to delete
  a file's entries; never stored
- ``TYPE``: which entry variant produced the document
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type

from whoosh.fields import ID, TEXT, Schema

from ..models import FileCheck, file_uri
from .analysis import FqnAnalyzer
from .exceptions import IndexCorruptionError

FQN_FIELD = "fqn"
FILE_FIELD = "file"
TYPE_FIELD = "TYPE"


class IndexSchema:
    """Index schema configuration and field definitions."""

    @classmethod
    def get_schema(cls) -> Schema:
        """Create and return the symbol index schema.

        Returns:
            Schema: Whoosh schema for fully-qualified name search
        """
        return Schema(
            fqn=TEXT(stored=True, analyzer=FqnAnalyzer(), phrase=False),
            file=ID(stored=False),
            TYPE=ID(stored=True),
        )


def create_index_schema() -> Schema:
    """Factory function to create the symbol index schema."""
    return IndexSchema.get_schema()


class FqnIndexType(str, Enum):
    """Discriminator tags stored in the ``TYPE`` field."""

    CLASS = "ClassIndex"
    METHOD = "MethodIndex"
    FIELD = "FieldIndex"


@dataclass
class IndexDocument:
    """Engine-level document: field values plus per-field boosts."""

    fields: Dict[str, Any]
    boosts: Dict[str, float] = field(default_factory=dict)

    def get(self, name: str) -> Optional[Any]:
        return self.fields.get(name)

    def boost(self, name: str) -> float:
        return self.boosts.get(name, 1.0)

    def boost_field(self, name: str, value: float) -> None:
        """Set the index-time boost of a field.

        Raises:
            ValueError: If the boost is not strictly positive
        """
        if value <= 0:
            raise ValueError(f"Boost for {name!r} must be positive, got {value}")
        self.boosts[name] = value

    def to_writer_fields(self) -> Dict[str, Any]:
        """Keyword arguments for ``IndexWriter.add_document``."""
        writer_fields = dict(self.fields)
        for name, value in self.boosts.items():
            writer_fields[f"_{name}_boost"] = value
        return writer_fields


@dataclass(frozen=True)
class FqnIndex:
    """An indexed symbol name.

    ``file`` is only known while indexing; entries read back from search
    results never carry it.
    """

    TYPE: ClassVar[FqnIndexType]

    fqn: str
    file: Optional[FileCheck] = None

    @property
    def id(self) -> str:
        return self.fqn

    def to_document(self) -> IndexDocument:
        """Project this entry onto an index document.

        Raises:
            ValueError: If the entry has no file reference
        """
        if self.file is None:
            raise ValueError(
                f"{type(self).__name__}({self.fqn!r}) needs a file reference "
                "to be indexed"
            )
        return IndexDocument(
            {
                FILE_FIELD: file_uri(self.file),
                FQN_FIELD: self.fqn,
                TYPE_FIELD: self.TYPE.value,
            }
        )

    @classmethod
    def from_document(cls, document: IndexDocument) -> "FqnIndex":
        return cls(document.get(FQN_FIELD), None)


@dataclass(frozen=True)
class ClassIndex(FqnIndex):
    TYPE: ClassVar[FqnIndexType] = FqnIndexType.CLASS


@dataclass(frozen=True)
class MethodIndex(FqnIndex):
    TYPE: ClassVar[FqnIndexType] = FqnIndexType.METHOD


@dataclass(frozen=True)
class FieldIndex(FqnIndex):
    TYPE: ClassVar[FqnIndexType] = FqnIndexType.FIELD


ENTITY_TYPES: Dict[FqnIndexType, Type[FqnIndex]] = {
    FqnIndexType.CLASS: ClassIndex,
    FqnIndexType.METHOD: MethodIndex,
    FqnIndexType.FIELD: FieldIndex,
}


def entity_from_document(document: IndexDocument) -> FqnIndex:
    """Rebuild the entry a document was created from, keyed on ``TYPE``.

    Raises:
        IndexCorruptionError: If the tag is not one of :class:`FqnIndexType`
    """
    tag = document.get(TYPE_FIELD)
    try:
        index_type = FqnIndexType(tag)
    except ValueError:
        raise IndexCorruptionError(tag, document.get(FQN_FIELD)) from None
    return ENTITY_TYPES[index_type].from_document(document)
