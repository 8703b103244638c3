"""Search module for the symbol index.

This module provides fully-qualified name indexing and search:
- Synonym analysis that makes abbreviated names searchable
- Entity mapping between index entries and stored documents
- Query construction for prefix, exact and camel-case matching
- Index-time boost policy for nested and prioritized symbols

Main components:
- IndexService: persist, remove, commit and search operations
- SearchIndexManager: Whoosh storage engine
- IndexSchema: Search index structure definition
"""

from .analysis import FqnAnalyzer, fqn_synonyms
from .exceptions import (
    IndexCorruptionError,
    IndexOperationError,
    SymbolIndexError,
)
from .index_manager import SearchIndexManager
from .index_schema import (
    ClassIndex,
    FieldIndex,
    FqnIndex,
    FqnIndexType,
    IndexDocument,
    IndexSchema,
    MethodIndex,
    create_index_schema,
    entity_from_document,
)
from .index_service import IndexService
from .relevance import calculate_boost, calculate_penalty

__all__ = [
    "ClassIndex",
    "FieldIndex",
    "FqnAnalyzer",
    "FqnIndex",
    "FqnIndexType",
    "IndexCorruptionError",
    "IndexDocument",
    "IndexOperationError",
    "IndexSchema",
    "IndexService",
    "MethodIndex",
    "SearchIndexManager",
    "SymbolIndexError",
    "calculate_boost",
    "calculate_penalty",
    "create_index_schema",
    "entity_from_document",
    "fqn_synonyms",
]
