"""Whoosh-backed storage for the symbol index.

This module provides the SearchIndexManager class which handles:
- Creating or opening the on-disk Whoosh index
- Batched inserts and term-query deletes through one pending writer
- Explicit commits, after which writes become visible to searches
- Running every blocking index call on a worker pool
"""

import asyncio
import errno
import functools
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from whoosh import index
from whoosh.index import Index
from whoosh.query import Query
from whoosh.writing import IndexWriter

from ..config.logging import get_logger, log_performance
from ..config.settings import IndexConfig
from .index_schema import IndexDocument, create_index_schema

logger = get_logger(__name__)


class SearchIndexManager:
    """Owns the Whoosh index, its pending writer and its worker pool.

    Writes go through a single writer that stays open until :meth:`commit`;
    searches open a fresh searcher and therefore only see committed data.
    """

    def __init__(self, index_dir: str, config: Optional[IndexConfig] = None):
        """Initialize the search index manager.

        Args:
            index_dir: Directory to store search index files
            config: Index configuration settings
        """
        self.index_dir = Path(index_dir)
        self.config = config or IndexConfig()
        self._index: Optional[Index] = None
        self._writer: Optional[IndexWriter] = None
        self._lock = threading.RLock()
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.worker_threads,
            thread_name_prefix="symbol-index",
        )

        self.index_dir.mkdir(parents=True, exist_ok=True)

    @property
    def index(self) -> Index:
        """Get or create the search index.

        Returns:
            Index: Whoosh index instance

        Raises:
            RuntimeError: If index cannot be opened or created
        """
        if self._index is None:
            try:
                if index.exists_in(str(self.index_dir)):
                    self._index = index.open_dir(str(self.index_dir))
                else:
                    self.index_dir.mkdir(parents=True, exist_ok=True)
                    schema = create_index_schema()
                    self._index = index.create_in(str(self.index_dir), schema)
            except Exception as e:
                raise RuntimeError(
                    f"Failed to open/create search index: {e}"
                ) from e

        return self._index

    async def put(
        self, documents: Iterable[IndexDocument], commit: bool = True
    ) -> None:
        """Add a batch of documents.

        Args:
            documents: Documents to insert
            commit: Whether to commit once the batch is written
        """
        await self._run(self._put, list(documents), commit)

    async def delete(
        self, queries: Iterable[Query], commit: bool = False
    ) -> int:
        """Delete every document matching any of ``queries``.

        Args:
            queries: Term queries selecting the documents to drop
            commit: Whether to commit after deleting

        Returns:
            int: Number of documents marked deleted
        """
        return await self._run(self._delete, list(queries), commit)

    async def commit(self) -> None:
        """Flush pending writes.

        Raises:
            FileNotFoundError: If the index directory no longer exists
        """
        await self._run(self._commit)

    async def search(self, query: Query, limit: int) -> List[IndexDocument]:
        """Run ``query`` against committed documents.

        Args:
            query: Whoosh query
            limit: Maximum number of hits

        Returns:
            List[IndexDocument]: Hits in descending score order
        """
        return await self._run(self._search, query, limit)

    async def shutdown(self) -> None:
        """Commit pending writes, close the index and stop the worker pool."""
        if self._closed:
            return
        try:
            await self._run(self._close)
        finally:
            self._executor.shutdown(wait=True)
            self._closed = True

    def close(self) -> None:
        """Blocking variant of :meth:`shutdown` for synchronous callers."""
        if self._closed:
            return
        try:
            self._close()
        finally:
            self._executor.shutdown(wait=True)
            self._closed = True

    async def get_index_stats(self) -> Dict[str, Any]:
        """Get statistics about the current search index.

        Returns:
            Dict[str, Any]: Document count and size on disk
        """
        return await self._run(self._stats)

    # Private methods

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(func, *args)
        )

    def _get_writer(self) -> IndexWriter:
        if self._writer is None:
            self._writer = self.index.writer()
        return self._writer

    def _put(self, documents: List[IndexDocument], commit: bool) -> None:
        start_time = time.time()
        with self._lock:
            writer = self._get_writer()
            for document in documents:
                writer.add_document(**document.to_writer_fields())
            if commit:
                self._commit()

        log_performance(
            logger,
            "put",
            (time.time() - start_time) * 1000,
            documents=len(documents),
            commit=commit,
        )

    def _delete(self, queries: List[Query], commit: bool) -> int:
        deleted = 0
        with self._lock:
            writer = self._get_writer()
            for query in queries:
                deleted += writer.delete_by_query(query)
            if commit:
                self._commit()

        logger.debug("Deleted documents", queries=len(queries), deleted=deleted)
        return deleted

    def _commit(self) -> None:
        with self._lock:
            if self._writer is None and self._index is None:
                return
            if not index.exists_in(str(self.index_dir)):
                self._abandon_writer()
                raise FileNotFoundError(
                    errno.ENOENT, "Index directory is missing", str(self.index_dir)
                )
            if self._writer is None:
                return

            writer, self._writer = self._writer, None
            try:
                writer.commit()
            except Exception:
                self._release(writer)
                raise

    def _abandon_writer(self) -> None:
        if self._writer is not None:
            writer, self._writer = self._writer, None
            self._release(writer)
        self._index = None

    @staticmethod
    def _release(writer: IndexWriter) -> None:
        try:
            writer.cancel()
        except Exception as e:
            # the files backing the writer may already be gone
            logger.warning("Could not cancel index writer", error=str(e))

    def _search(self, query: Query, limit: int) -> List[IndexDocument]:
        if limit < 1:
            return []

        start_time = time.time()
        with self._lock:
            ix = self.index
        with ix.searcher() as searcher:
            results = searcher.search(query, limit=limit)
            documents = [IndexDocument(dict(hit.fields())) for hit in results]

        log_performance(
            logger,
            "search",
            (time.time() - start_time) * 1000,
            limit=limit,
            hits=len(documents),
        )
        return documents

    def _close(self) -> None:
        with self._lock:
            if self._writer is not None:
                self._commit()
            if self._index is not None:
                self._index.close()
                self._index = None

    def _stats(self) -> Dict[str, Any]:
        with self._lock:
            ix = self.index
        files = [
            os.path.join(self.index_dir, f)
            for f in os.listdir(self.index_dir)
            if os.path.isfile(os.path.join(self.index_dir, f))
        ]
        index_size = sum(os.path.getsize(f) for f in files)

        with ix.searcher() as searcher:
            return {
                "document_count": searcher.doc_count(),
                "field_count": len(ix.schema.names()),
                "index_size_bytes": index_size,
                "index_size_mb": round(index_size / (1024 * 1024), 2),
                "index_directory": str(self.index_dir),
            }
