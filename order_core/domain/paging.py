# order_core/domain/paging.py
from dataclasses import dataclass

from order_core.domain.errors import ValidationError
from order_core.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_PAGE_NUMBER

SORTABLE_FIELDS = (
    "created_at",
    "updated_at",
    "total_amount",
    "order_number",
    "status",
    "payment_status",
)


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "created_at"
    sort_dir: str = "desc"

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.sort_dir == "desc"


def normalize_paging(
    page: int | None = None,
    size: int | None = None,
    sort_by: str | None = None,
    sort_dir: str | None = None,
) -> PageRequest:
    """Clamp page/size and validate the sort field and direction; pages are zero-based."""
    p = page if page and page > 0 else 0
    p = min(p, MAX_PAGE_NUMBER)
    s = size if size and size > 0 else DEFAULT_PAGE_SIZE
    s = min(s, MAX_PAGE_SIZE)

    field = (sort_by or "created_at").strip()
    if field not in SORTABLE_FIELDS:
        raise ValidationError(f"Cannot sort orders by: {field}")

    direction = (sort_dir or "desc").strip().lower()
    if direction not in ("asc", "desc"):
        raise ValidationError(f"Invalid sort direction: {sort_dir}")

    return PageRequest(page=p, size=s, sort_by=field, sort_dir=direction)
