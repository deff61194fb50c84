from dataclasses import dataclass, field
from typing import List, Optional

from .models import Pagination


@dataclass
class PageWindow:
    """Dados de exibição do controle de paginação"""
    page: int
    total_pages: int
    total: int
    first_item: int
    last_item: int
    has_previous: bool
    has_next: bool
    pages: List[Optional[int]] = field(default_factory=list)

    @property
    def visible(self) -> bool:
        return self.total_pages > 1


def page_window(pagination: Pagination, window: int = 5) -> PageWindow:
    """
    Calcula o controle de paginação para a página atual.

    Args:
        pagination: Metadados de paginação devolvidos pela API
        window: Quantidade de páginas exibidas ao redor da atual

    Returns:
        PageWindow com os números de página; None marca um salto (reticências)
    """
    total_pages = max(0, pagination.total_pages)
    page = min(max(1, pagination.page), total_pages) if total_pages else 1
    limit = max(1, pagination.limit)

    if pagination.total > 0:
        first_item = (page - 1) * limit + 1
        last_item = min(page * limit, pagination.total)
    else:
        first_item = last_item = 0

    pages: List[Optional[int]] = []
    if total_pages:
        half = window // 2
        start = max(1, page - half)
        end = min(total_pages, start + window - 1)
        start = max(1, end - window + 1)

        if start > 1:
            pages.append(1)
            if start > 2:
                pages.append(None)
        pages.extend(range(start, end + 1))
        if end < total_pages:
            if end < total_pages - 1:
                pages.append(None)
            pages.append(total_pages)

    return PageWindow(
        page=page,
        total_pages=total_pages,
        total=pagination.total,
        first_item=first_item,
        last_item=last_item,
        has_previous=page > 1,
        has_next=page < total_pages,
        pages=pages,
    )
