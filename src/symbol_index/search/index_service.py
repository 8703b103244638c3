"""Symbol index service: persist, remove, commit and search symbol names.

Every operation is a coroutine. Blocking index work happens on the
storage engine's worker pool, never on the caller's event loop thread.

Writes become visible to searches only after a commit. To replace a
file's entries atomically at the durability boundary, stage the deletes
with :meth:`IndexService.remove` and then persist with ``commit=True``, or
use :meth:`IndexService.reindex`, which does exactly that.
"""

import time
from typing import Any, Awaitable, Iterable, List, Optional, TypeVar

from ..config.logging import get_logger, log_performance
from ..config.settings import IndexConfig
from ..models import (
    ClassSymbolInfo,
    FieldSymbolInfo,
    FileRef,
    MethodSymbolInfo,
    SourceSymbolInfo,
    TypeAliasSymbolInfo,
    file_uri,
)
from .exceptions import IndexOperationError, SymbolIndexError
from .index_manager import SearchIndexManager
from .index_schema import (
    FQN_FIELD,
    ClassIndex,
    FieldIndex,
    FqnIndex,
    IndexDocument,
    MethodIndex,
    entity_from_document,
)
from .query_builder import class_query, classes_methods_query, file_query
from .relevance import calculate_boost

logger = get_logger(__name__)

T = TypeVar("T")


def index_entry(symbol: SourceSymbolInfo) -> Optional[FqnIndex]:
    """Map a symbol record to the entry it is indexed as.

    Returns None for records that are not worth indexing: synthetic classes
    without decompiled metadata, and symbols without a name.

    Raises:
        TypeError: If ``symbol`` is not a known symbol record
    """
    if isinstance(symbol, ClassSymbolInfo):
        if not symbol.indexable:
            return None
        entry_type = ClassIndex
    elif isinstance(symbol, MethodSymbolInfo):
        entry_type = MethodIndex
    elif isinstance(symbol, (FieldSymbolInfo, TypeAliasSymbolInfo)):
        entry_type = FieldIndex
    else:
        raise TypeError(f"Unsupported symbol record: {symbol!r}")

    if not symbol.fqn:
        return None
    return entry_type(symbol.fqn, symbol.file)


def distinct(entries: Iterable[T]) -> List[T]:
    """Drop repeated entries, keeping first-seen order."""
    return list(dict.fromkeys(entries))


class IndexService:
    """High-level symbol index operations on top of a storage engine."""

    def __init__(
        self,
        engine: SearchIndexManager,
        config: Optional[IndexConfig] = None,
    ):
        """Initialize the index service.

        Args:
            engine: Storage engine executing puts, deletes and searches
            config: Boost policy and result limits; defaults to the
                engine's configuration
        """
        self.engine = engine
        self.config = config or engine.config

    @classmethod
    def open(
        cls, index_dir: str, config: Optional[IndexConfig] = None
    ) -> "IndexService":
        """Create a service over a Whoosh index stored in ``index_dir``."""
        config = config or IndexConfig()
        return cls(SearchIndexManager(index_dir, config), config)

    async def __aenter__(self) -> "IndexService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    def build_documents(
        self, symbols: Iterable[SourceSymbolInfo], boost: bool = False
    ) -> List[IndexDocument]:
        """Turn symbol records into boosted index documents.

        Args:
            symbols: Freshly extracted symbol records
            boost: Whether to add the priority bonus to every document

        Returns:
            List[IndexDocument]: One document per indexable symbol
        """
        documents = []
        for symbol in symbols:
            entry = index_entry(symbol)
            if entry is None:
                continue
            document = entry.to_document()
            document.boost_field(
                FQN_FIELD,
                calculate_boost(
                    entry.fqn,
                    prioritize=boost,
                    step=self.config.penalty_step,
                    bonus=self.config.priority_bonus,
                ),
            )
            documents.append(document)
        return documents

    async def persist(
        self,
        symbols: Iterable[SourceSymbolInfo],
        commit: bool = True,
        boost: bool = False,
    ) -> None:
        """Index a batch of symbols.

        Args:
            symbols: Symbol records to index
            commit: Whether to commit once the batch is written
            boost: Whether to prioritize these symbols in rankings
        """
        symbols = list(symbols)
        documents = self.build_documents(symbols, boost)
        if not documents:
            if commit:
                await self.commit()
            return

        await self._engine_call("put", self.engine.put(documents, commit))
        logger.info(
            "Persisted symbols",
            symbols=len(symbols),
            documents=len(documents),
            commit=commit,
            boost=boost,
        )

    async def commit(self) -> None:
        """Flush pending writes.

        A missing index directory is logged and otherwise ignored: it shows
        up both in harmless startup or test races and when the files were
        deleted underneath us, and there is nothing to do about either here.
        """
        try:
            await self._engine_call("commit", self.engine.commit())
        except FileNotFoundError as e:
            logger.error("The symbol index database was deleted", error=str(e))

    async def remove(self, files: Iterable[FileRef]) -> int:
        """Stage deletion of every entry that came from ``files``.

        Nothing is committed here; callers batch removals and persists and
        commit once.

        Returns:
            int: Number of documents marked deleted
        """
        queries = [file_query(file_uri(f)) for f in files]
        if not queries:
            return 0

        deleted = await self._engine_call(
            "delete", self.engine.delete(queries, commit=False)
        )
        logger.info("Removed file entries", files=len(queries), deleted=deleted)
        return deleted

    async def reindex(
        self,
        files: Iterable[FileRef],
        symbols: Iterable[SourceSymbolInfo],
        boost: bool = False,
    ) -> None:
        """Replace the entries of ``files`` with ``symbols`` in one commit."""
        await self.remove(files)
        await self.persist(symbols, commit=True, boost=boost)

    async def search_classes(
        self, query: str, max_results: Optional[int] = None
    ) -> List[ClassIndex]:
        """Find classes whose name matches ``query``.

        Args:
            query: Raw query text, matched by prefix, exactly or by camel case
            max_results: Result cap, defaults to the configured one

        Returns:
            List[ClassIndex]: Distinct matches, best first
        """
        limit = self._limit(max_results)
        start_time = time.time()
        documents = await self._engine_call(
            "search", self.engine.search(class_query(query), limit)
        )
        results = distinct(entity_from_document(d) for d in documents)[:limit]

        log_performance(
            logger,
            "search_classes",
            (time.time() - start_time) * 1000,
            query=query,
            results=len(results),
        )
        return results

    async def search_classes_methods(
        self, terms: Iterable[str], max_results: Optional[int] = None
    ) -> List[FqnIndex]:
        """Find classes and methods matching any of ``terms``.

        Each document is ranked by its single best matching term. Fields are
        never returned.
        """
        terms = list(terms)
        if not terms:
            return []

        limit = self._limit(max_results)
        start_time = time.time()
        documents = await self._engine_call(
            "search", self.engine.search(classes_methods_query(terms), limit)
        )
        results = distinct(entity_from_document(d) for d in documents)[:limit]

        log_performance(
            logger,
            "search_classes_methods",
            (time.time() - start_time) * 1000,
            terms=len(terms),
            results=len(results),
        )
        return results

    async def stats(self) -> dict:
        return await self._engine_call("stats", self.engine.get_index_stats())

    async def shutdown(self) -> None:
        """Release the storage engine."""
        await self._engine_call("shutdown", self.engine.shutdown())
        logger.debug("Index service shut down")

    def _limit(self, max_results: Optional[int]) -> int:
        if max_results is None:
            return self.config.default_max_results
        return max_results

    async def _engine_call(self, operation: str, call: Awaitable[Any]) -> Any:
        try:
            return await call
        except (FileNotFoundError, SymbolIndexError):
            raise
        except Exception as e:
            logger.error("Index operation failed", operation=operation, error=str(e))
            raise IndexOperationError(operation, str(e)) from e
