"""State machine for the past results screen and the async shell driving it.

``ResultsState`` is a single immutable value. The module-level functions are
pure transitions over it; ``ResultsController`` is the only place that awaits
the network and it applies outcomes through those same transitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from models.records import ChartBucket, Measurement, QueryFilter, ViewMode
from services.aggregator import Aggregator
from services.errors import FetchError, ValidationError
from services.fetcher import FetchOutcome, ResultsFetcher
from services.pagination import PaginationState
from services.query import ensure_fetchable, is_fetchable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultsState:
    query: QueryFilter = field(default_factory=QueryFilter)
    pagination: PaginationState = field(default_factory=PaginationState)
    measurements: Tuple[Measurement, ...] = ()
    view: ViewMode = ViewMode.table
    loading: bool = False
    error: Optional[str] = None
    generation: int = 0


@dataclass(frozen=True)
class FetchTicket:
    """Identifies one issued request; only the latest ticket may be applied."""

    generation: int
    query: QueryFilter
    page: int
    page_size: int


def initial_state(page_size: int = 10, radius_km: float = 10.0) -> ResultsState:
    return ResultsState(
        query=QueryFilter(radius_km=radius_km),
        pagination=PaginationState(page_size=page_size),
    )


def with_query(state: ResultsState, query: QueryFilter) -> ResultsState:
    if query == state.query:
        return state
    return replace(state, query=query, pagination=state.pagination.reset())


def with_view(state: ResultsState, view: ViewMode) -> ResultsState:
    return replace(state, view=view)


def begin_fetch(state: ResultsState, page: int) -> Tuple[ResultsState, FetchTicket]:
    ensure_fetchable(state.query)
    ticket = FetchTicket(
        generation=state.generation + 1,
        query=state.query,
        page=page,
        page_size=state.pagination.page_size,
    )
    started = replace(
        state,
        measurements=(),
        loading=True,
        error=None,
        generation=ticket.generation,
    )
    return started, ticket


def reject_fetch(state: ResultsState, error: FetchError) -> ResultsState:
    """Record a fetch refused before reaching the network.

    The generation still advances so a request issued for the previous filter
    cannot land on top of the refusal.
    """
    return replace(
        _failed(state, error),
        generation=state.generation + 1,
    )


def _failed(state: ResultsState, error: FetchError) -> ResultsState:
    return replace(state, measurements=(), loading=False, error=error.message)


def apply_outcome(
    state: ResultsState, ticket: FetchTicket, outcome: FetchOutcome
) -> ResultsState:
    if ticket.generation != state.generation:
        return state
    if outcome.error is not None:
        return _failed(state, outcome.error)
    assert outcome.page is not None
    return replace(
        state,
        measurements=outcome.page.measurements,
        pagination=state.pagination.apply(outcome.page.page_info),
        loading=False,
        error=None,
    )


def can_search(state: ResultsState) -> bool:
    return not state.loading and is_fetchable(state.query)


def can_go_next(state: ResultsState) -> bool:
    return not state.loading and state.pagination.can_go_next


def can_go_previous(state: ResultsState) -> bool:
    return not state.loading and state.pagination.can_go_previous


def chart_buckets(state: ResultsState, aggregator: Optional[Aggregator] = None) -> List[ChartBucket]:
    return (aggregator or Aggregator()).aggregate(state.measurements)


class ResultsController:
    """Runs fetches for the current state and keeps the newest result."""

    def __init__(
        self,
        fetcher: ResultsFetcher,
        state: Optional[ResultsState] = None,
        aggregator: Optional[Aggregator] = None,
    ) -> None:
        self.fetcher = fetcher
        self.aggregator = aggregator or Aggregator()
        self.state = state or initial_state(page_size=fetcher.page_size)

    async def search(self) -> ResultsState:
        """Fetch the first page for the current filter, superseding pending fetches."""
        return await self.goto(1)

    async def update_query(self, **changes) -> ResultsState:
        self.state = with_query(self.state, self.state.query.update(**changes))
        return await self.search()

    async def goto(self, page: int) -> ResultsState:
        try:
            self.state, ticket = begin_fetch(self.state, page)
        except ValidationError as exc:
            logger.info("Search rejected: %s", exc.message, extra={"error_kind": exc.kind})
            self.state = reject_fetch(self.state, exc)
            return self.state

        outcome = await self.fetcher.fetch_page(ticket.query, ticket.page, ticket.page_size)
        if ticket.generation != self.state.generation:
            logger.info(
                "Discarding stale response",
                extra={"generation": ticket.generation, "page": ticket.page},
            )
        self.state = apply_outcome(self.state, ticket, outcome)
        return self.state

    async def next_page(self) -> ResultsState:
        if not can_go_next(self.state):
            return self.state
        return await self.goto(self.state.pagination.next_page().page)

    async def previous_page(self) -> ResultsState:
        if not can_go_previous(self.state):
            return self.state
        return await self.goto(self.state.pagination.previous_page().page)

    def set_view(self, view: ViewMode) -> ResultsState:
        self.state = with_view(self.state, view)
        return self.state

    def chart(self) -> List[ChartBucket]:
        return chart_buckets(self.state, self.aggregator)
