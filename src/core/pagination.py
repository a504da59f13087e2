"""
Outils de pagination, de tri et de filtrage partagés par les routeurs de listes.

Toutes les listes paginées exposent les mêmes paramètres (page, page_size,
search, sort_by, sort_order) et renvoient un PaginatedResponse accompagné
d'un en-tête Content-Range.
"""
import logging
from typing import Annotated, Generic, List, Optional, Sequence, TypeVar

from fastapi import Depends, Query, Response
from pydantic import BaseModel
from sqlmodel import SQLModel

from src.config import settings
from src.core.exceptions import InvalidSortFieldException

logger = logging.getLogger(__name__)

T = TypeVar('T')


class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int


class PageParams(SQLModel):
    """Paramètres de requête communs aux listes paginées."""
    page: int = 1
    page_size: int = settings.DEFAULT_PAGE_SIZE
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"

    @property
    def search_pattern(self) -> Optional[str]:
        if self.search is None or not self.search.strip():
            return None
        return f"%{self.search.strip()}%"


def get_page_params(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
) -> PageParams:
    return PageParams(page=page, page_size=page_size, search=search, sort_by=sort_by, sort_order=sort_order)

PageParamsDep = Annotated[PageParams, Depends(get_page_params)]


def resolve_sort_field(sort_by: Optional[str], allowed: Sequence[str], default: str) -> str:
    """Valide le champ de tri demandé contre la liste autorisée de l'endpoint."""
    if sort_by is None or sort_by == "":
        return default
    if sort_by not in allowed:
        raise InvalidSortFieldException(sort_by, allowed)
    return sort_by


def parse_csv(value: Optional[str]) -> List[str]:
    """Découpe un filtre CSV ('Pending,Paid') en liste de valeurs non vides."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_csv_ints(value: Optional[str]) -> List[int]:
    values = []
    for part in parse_csv(value):
        try:
            values.append(int(part))
        except ValueError:
            logger.debug(f"Valeur entière ignorée dans le filtre CSV: '{part}'")
    return values


def set_content_range(response: Response, resource: str, offset: int, count: int, total: int) -> None:
    end_range = offset + count - 1 if count else offset
    response.headers["Content-Range"] = f"{resource} {offset}-{end_range}/{total}"
