"""Map request paths onto objects, directory redirects or not-found."""

from __future__ import annotations

from packages.website_shared.logging import get_logger
from packages.website_shared.object_store import LookupStatus, ObjectStore
from services.website.domain import Failed, NotFound, RedirectTo, ResolvedAction, Serve

_LOGGER = get_logger(__name__)


def object_key(path: str) -> str:
    """Derive the object key for one request path (leading slashes removed)."""
    return path.lstrip("/")


class WebsiteResolver:
    """Resolve one request path with at most two metadata lookups.

    First match wins:

    1. ``/dir/`` serves ``dir/<index document>`` without any lookup.
    2. An existing object at the path's key is served as-is.
    3. An existing ``<key>/<index document>`` redirects to ``<path>/``.
    4. Anything else is not found.

    A store error from either lookup aborts resolution as ``Failed``.
    """

    def __init__(
        self,
        *,
        store: ObjectStore,
        index_document: str = "index.html",
        redirect_status: int = 302,
    ) -> None:
        self._store = store
        self._index_document = index_document
        self._redirect_status = redirect_status

    def resolve(self, path: str) -> ResolvedAction:
        """Return the action for ``path``."""
        path = path or "/"
        key = object_key(path)
        if path.endswith("/"):
            return Serve(key=key + self._index_document)

        lookup = self._store.head_object(key)
        if lookup.status is LookupStatus.ERROR:
            assert lookup.error is not None
            return Failed(error=lookup.error)
        if lookup.status is LookupStatus.FOUND:
            return Serve(key=key)

        index_lookup = self._store.head_object(f"{key}/{self._index_document}")
        if index_lookup.status is LookupStatus.ERROR:
            assert index_lookup.error is not None
            return Failed(error=index_lookup.error)
        if index_lookup.status is LookupStatus.FOUND:
            _LOGGER.debug("directory index found; redirecting")
            return RedirectTo(
                location="/" + path.lstrip("/") + "/",
                status=self._redirect_status,
            )
        return NotFound()
