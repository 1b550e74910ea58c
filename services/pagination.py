"""Page cursor bookkeeping for the past results listing."""

from __future__ import annotations

from dataclasses import dataclass, replace

from models.records import PageInfo


def clamp(requested: int, total_pages: int) -> int:
    return max(1, min(requested, max(total_pages, 1)))


@dataclass(frozen=True)
class PaginationState:
    page: int = 1
    page_size: int = 10
    total_pages: int = 1
    total_results: int = 0

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def can_go_previous(self) -> bool:
        return self.page > 1

    @property
    def page_info(self) -> PageInfo:
        return PageInfo(
            page=self.page,
            page_size=self.page_size,
            total_pages=self.total_pages,
            total_results=self.total_results,
        )

    def next_page(self) -> PaginationState:
        """Advance one page, or return ``self`` when already on the last one."""
        if not self.can_go_next:
            return self
        return replace(self, page=self.page + 1)

    def previous_page(self) -> PaginationState:
        if not self.can_go_previous:
            return self
        return replace(self, page=self.page - 1)

    def reset(self) -> PaginationState:
        return replace(self, page=1)

    def apply(self, info: PageInfo) -> PaginationState:
        """Adopt pagination reported by the server, keeping the page in bounds."""
        return PaginationState(
            page=clamp(info.page, info.total_pages),
            page_size=info.page_size,
            total_pages=info.total_pages,
            total_results=info.total_results,
        )
