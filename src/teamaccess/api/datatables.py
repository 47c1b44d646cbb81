"""Server-side processing helpers for DataTables tables."""

from typing import Any

from fastapi import Query, Request
from pydantic import BaseModel, Field

MAX_PAGE_LENGTH = 500
MAX_ORDER_COLUMNS = 10


class DataTablesParams(BaseModel):
    """Paging, ordering and search parameters sent by a DataTables client."""
    draw: int = 0
    start: int = 0
    length: int | None = None
    search: str | None = None
    order: list[tuple[str, str]] = Field(default_factory=list)

    @classmethod
    def as_query(
        cls,
        request: Request,
        draw: int = Query(default=0, ge=0),
        start: int = Query(default=0, ge=0),
        length: int = Query(default=-1, ge=-1, le=MAX_PAGE_LENGTH),
    ) -> "DataTablesParams":
        """FastAPI dependency; ``length=-1`` asks for every row.

        ``order[i][column]`` points into ``columns[j][data]``; entries for
        unknown or non-orderable columns are skipped.
        """
        query = request.query_params
        search = (query.get("search[value]") or "").strip()

        return cls(
            draw=draw,
            start=start,
            length=None if length == -1 else length,
            search=search or None,
            order=_parse_order(query),
        )


def _parse_order(query) -> list[tuple[str, str]]:
    order = []
    for i in range(MAX_ORDER_COLUMNS):
        column_index = query.get(f"order[{i}][column]")
        if column_index is None:
            break
        if not column_index.isdigit():
            continue
        if query.get(f"columns[{column_index}][orderable]") == "false":
            continue

        field = query.get(f"columns[{column_index}][data]")
        if not field:
            continue

        direction = (query.get(f"order[{i}][dir]") or "asc").lower()
        order.append((field, "desc" if direction == "desc" else "asc"))

    return order


def datatables_response(
    params: DataTablesParams,
    records_total: int,
    records_filtered: int,
    data: list[dict[str, Any]],
) -> dict[str, Any]:
    """Build the JSON body a DataTables client expects."""
    return {
        "draw": params.draw,
        "recordsTotal": records_total,
        "recordsFiltered": records_filtered,
        "data": data,
        "input": {"start": params.start, "length": params.length},
    }
