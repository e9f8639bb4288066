from pydantic import BaseModel


class PageRef(BaseModel):
    page: int
    limit: int


class Pagination(BaseModel):
    next: PageRef | None = None
    prev: PageRef | None = None


def page_bounds(page: int, limit: int) -> tuple[int, int]:
    """Returns (offset, end index) for a 1-based page number."""
    offset = (page - 1) * limit
    return offset, page * limit


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """
    Navigation links for one page of a listing.

    `next` is present while entries remain after this page,
    `prev` whenever this page does not start at the first entry.
    """
    offset, end_index = page_bounds(page, limit)
    pagination = Pagination()
    if end_index < total:
        pagination.next = PageRef(page=page + 1, limit=limit)
    if offset > 0:
        pagination.prev = PageRef(page=page - 1, limit=limit)
    return pagination
