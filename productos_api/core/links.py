"""HATEOAS Links & Meta — pure builders for navigation and pagination metadata.

Invariants:
    - build_links always emits self, home, collection (in that order)
    - item is added iff an id is given
    - prev iff offset > 0; next iff offset + limit < total
    - Pagination links keep every other query parameter of the current request

Design Decisions:
    - LinkContext captures the three request facts links need (base URL,
      current URL, query params) so builders stay free of FastAPI types
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from urllib.parse import urlencode

from productos_api.core.domain_types import Pagination

COLLECTION_PATH = "productos"


@dataclass(frozen=True)
class LinkContext:
    """Request facts needed to build absolute links."""
    base_url: str   # always ends with "/"
    self_url: str
    query: Mapping[str, str] = field(default_factory=dict)

    @property
    def home(self) -> str:
        return self.base_url

    @property
    def collection(self) -> str:
        return f"{self.base_url}{COLLECTION_PATH}"

    def item(self, producto_id: int | str) -> str:
        return f"{self.collection}/{producto_id}"


def _link(rel: str, href: str) -> dict:
    return {"rel": rel, "href": href}


def _page_href(ctx: LinkContext, limit: int, offset: int) -> str:
    query = {**ctx.query, "limit": str(limit), "offset": str(offset)}
    return f"{ctx.collection}?{urlencode(query)}"


def build_links(
    ctx: LinkContext,
    item_id: int | str | None = None,
    pagination: Pagination | None = None,
) -> list[dict]:
    """Relation list for a response. Pure, no IO."""
    links = [
        _link("self", ctx.self_url),
        _link("home", ctx.home),
        _link("collection", ctx.collection),
    ]
    if item_id is not None:
        links.append(_link("item", ctx.item(item_id)))

    if pagination:
        limit, offset, total = (
            pagination.limit, pagination.offset, pagination.total,
        )
        if offset > 0:
            prev_offset = max(0, offset - limit)
            links.append(_link("prev", _page_href(ctx, limit, prev_offset)))
        if offset + limit < total:
            links.append(_link("next", _page_href(ctx, limit, offset + limit)))

    return links


def collection_links(ctx: LinkContext) -> list[dict]:
    """Links for responses whose resource no longer exists (delete, purge)."""
    return [
        _link("collection", ctx.collection),
        _link("home", ctx.home),
    ]


def home_links(ctx: LinkContext) -> list[dict]:
    return [_link("home", ctx.home)]


def build_meta(
    total: int, limit: int, offset: int, filtros: dict | None = None,
) -> dict:
    return {
        "total": int(total),
        "limit": int(limit),
        "offset": int(offset),
        "filtros": filtros or {},
    }


def timestamp_now() -> str:
    return datetime.now(timezone.utc).isoformat()
