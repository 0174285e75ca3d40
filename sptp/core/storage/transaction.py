"""Single-document optimistic transactions over the object store."""

from collections.abc import Callable
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from ..errors import NotFoundError, VersionConflictError
from ..models.base import CompanyDocument, utc_now
from .object_store import ObjectStore
from ...observability.logger import get_logger

logger = get_logger(__name__)

TDoc = TypeVar("TDoc", bound=CompanyDocument)

DEFAULT_CONCURRENCY = {"max_attempts": 10, "wait_min": 0.001, "wait_max": 0.05}


def _log_conflict(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.info(
        "version_conflict_retry",
        collection=getattr(exc, "collection", None),
        doc_id=getattr(exc, "doc_id", None),
        attempt=retry_state.attempt_number,
    )


def load_document(
    store: ObjectStore,
    company_id: str,
    collection: str,
    doc_id: str,
    model: type[TDoc],
    entity: str,
) -> TDoc:
    """Read and validate a document.

    Raises:
        NotFoundError: If the document does not exist
    """
    data = store.get(company_id, collection, doc_id)
    if data is None:
        raise NotFoundError(entity, doc_id)
    return model(**data)


def save_new(store: ObjectStore, collection: str, doc: TDoc) -> TDoc:
    """Persist a freshly created document; fails if the id is already taken."""
    stored = store.put(doc.company_id, collection, doc.id, doc.model_dump(mode="json"), expected_version=0)
    return type(doc)(**stored)


def run_transaction(
    store: ObjectStore,
    company_id: str,
    collection: str,
    doc_id: str,
    model: type[TDoc],
    mutate: Callable[[TDoc], TDoc],
    entity: str,
    concurrency: dict[str, Any] | None = None,
) -> TDoc:
    """Apply ``mutate`` to one document with compare-and-swap semantics.

    The document is read, handed to ``mutate`` (which must return the updated
    document without side effects), and written back only if nobody else
    wrote it in between. On a version conflict the whole read-mutate-write is
    retried with jittered backoff.

    Args:
        store: Document store
        company_id: Owning company
        collection: Collection name
        doc_id: Document id
        model: Pydantic model of the document
        mutate: Pure function from current to updated document
        entity: Human-readable entity name for NotFoundError
        concurrency: ``max_attempts`` / ``wait_min`` / ``wait_max`` overrides

    Returns:
        The stored document after the mutation

    Raises:
        NotFoundError: If the document does not exist (not retried)
        VersionConflictError: If every attempt lost the race
    """
    settings = {**DEFAULT_CONCURRENCY, **(concurrency or {})}
    retrying = Retrying(
        stop=stop_after_attempt(int(settings["max_attempts"])),
        wait=wait_random_exponential(
            multiplier=float(settings["wait_min"]), max=float(settings["wait_max"])
        ),
        retry=retry_if_exception_type(VersionConflictError),
        before_sleep=_log_conflict,
        reraise=True,
    )

    def attempt() -> TDoc:
        current = load_document(store, company_id, collection, doc_id, model, entity)
        updated = mutate(current)
        updated.updated_at = utc_now()
        stored = store.put(
            company_id,
            collection,
            doc_id,
            updated.model_dump(mode="json"),
            expected_version=current.version,
        )
        return model(**stored)

    return retrying(attempt)
