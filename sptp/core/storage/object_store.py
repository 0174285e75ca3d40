"""File-based document store for company-scoped succession data.

Documents are JSON files laid out as
``<base_dir>/companies/<company_id>/<collection>/<doc_id>.json``. Every
document carries an integer ``version`` that the store bumps on each write;
``put`` accepts the version the caller read and refuses the write when the
stored document has moved on (compare-and-swap). The compare and the write
run under a lock file beside the document, so writers in other processes
sharing the directory are serialized too.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from filelock import FileLock

from ..errors import VersionConflictError
from ...observability.logger import get_logger

logger = get_logger(__name__)

CRITICAL_ROLES = "critical_roles"
DEVELOPMENT_PLANS = "development_plans"
TALENT_POOLS = "talent_pools"
SUCCESSION_PLANS = "succession_plans"


class ObjectStore:
    """Simple JSON-backed document store with optimistic concurrency."""

    # In-process lock per store directory; lock files cover other processes
    _locks: dict[Path, threading.RLock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, base_dir: str | Path | None = None, lock_timeout: float = 30.0):
        self.base_dir = Path(base_dir) if base_dir else Path("data/store")
        self.lock_timeout = lock_timeout
        self.base_dir.mkdir(parents=True, exist_ok=True)
        with self._locks_guard:
            self._lock = self._locks.setdefault(self.base_dir.resolve(), threading.RLock())

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    def _collection_dir(self, company_id: str, collection: str) -> Path:
        return self.base_dir / "companies" / company_id / collection

    def _doc_path(self, company_id: str, collection: str, doc_id: str) -> Path:
        return self._collection_dir(company_id, collection) / f"{doc_id}.json"

    def _file_lock(self, path: Path) -> FileLock:
        path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(path.with_suffix(".lock"), timeout=self.lock_timeout)

    def _dump(self, path: Path, data: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _load(self, path: Path) -> dict[str, Any] | None:
        # A concurrent delete may remove the file at any point
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return json.loads(text)

    @staticmethod
    def _matches(data: dict[str, Any], where: dict[str, Any] | None) -> bool:
        if not where:
            return True
        return all(data.get(field) == value for field, value in where.items())

    @staticmethod
    def _sort_key(field: str):
        # None sorts first ascending, last descending
        def key(data: dict[str, Any]) -> tuple[bool, Any]:
            value = data.get(field)
            return (value is not None, value)

        return key

    # ------------------------------------------------------------------
    # Single documents
    # ------------------------------------------------------------------
    def get(self, company_id: str, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Read a document by id, or None when it does not exist."""
        return self._load(self._doc_path(company_id, collection, doc_id))

    def put(
        self,
        company_id: str,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        expected_version: int | None = None,
    ) -> dict[str, Any]:
        """Write a whole document and bump its version.

        Args:
            company_id: Owning company
            collection: Collection name
            doc_id: Document id
            data: Full document body
            expected_version: Version the caller read; ``0`` means the document
                must not exist yet, ``None`` skips the check

        Returns:
            The stored document, including its new version

        Raises:
            VersionConflictError: If the stored version differs from
                ``expected_version``
            filelock.Timeout: If another writer holds the document longer
                than ``lock_timeout`` seconds
        """
        path = self._doc_path(company_id, collection, doc_id)
        with self._lock, self._file_lock(path):
            current = self._load(path)
            actual = current.get("version", 0) if current else 0
            if expected_version is not None and actual != expected_version:
                logger.debug(
                    "version_conflict",
                    company_id=company_id,
                    collection=collection,
                    doc_id=doc_id,
                    expected=expected_version,
                    actual=actual,
                )
                raise VersionConflictError(collection, doc_id, expected_version, actual)

            stored = {**data, "id": doc_id, "version": actual + 1}
            self._dump(path, stored)
        return stored

    def delete(self, company_id: str, collection: str, doc_id: str) -> bool:
        """Hard-delete a document. Returns False when it did not exist."""
        path = self._doc_path(company_id, collection, doc_id)
        with self._lock, self._file_lock(path):
            try:
                path.unlink()
            except FileNotFoundError:
                return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_ids(self, company_id: str, collection: str) -> list[str]:
        coll_dir = self._collection_dir(company_id, collection)
        if not coll_dir.exists():
            return []
        return sorted(p.stem for p in coll_dir.glob("*.json"))

    def query(
        self,
        company_id: str,
        collection: str,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return documents whose fields equal every ``where`` value.

        Args:
            company_id: Owning company
            collection: Collection name
            where: Field -> required value (equality only)
            order_by: Optional field to sort by
            descending: Sort direction for ``order_by``

        Returns:
            Matching documents
        """
        docs = [doc for chunk in self.iter_query(company_id, collection, where) for doc in chunk]
        if order_by:
            docs.sort(key=self._sort_key(order_by), reverse=descending)
        return docs

    def iter_query(
        self,
        company_id: str,
        collection: str,
        where: dict[str, Any] | None = None,
        chunk_size: int = 200,
    ) -> Iterator[list[dict[str, Any]]]:
        """Stream matching documents in chunks, loading files lazily.

        Documents deleted between listing and reading are skipped.
        """
        chunk: list[dict[str, Any]] = []
        for doc_id in self.list_ids(company_id, collection):
            data = self.get(company_id, collection, doc_id)
            if data is None or not self._matches(data, where):
                continue
            chunk.append(data)
            if len(chunk) >= chunk_size:
                yield chunk
                chunk = []
        if chunk:
            yield chunk
