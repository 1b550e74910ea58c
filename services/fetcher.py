"""Async client for the past speed-test results endpoint."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx
from pydantic import ValidationError as PayloadValidationError

from models.records import Measurement, PageInfo, QueryFilter
from models.schemas import ErrorResponse, ResultsResponse
from services.errors import (
    GENERIC_FETCH_MESSAGE,
    FetchError,
    HTTPError,
    NetworkError,
    ParseError,
)
from services.query import build_query_params

logger = logging.getLogger(__name__)

RESULTS_PATH = "/api/speed-test"


@dataclass(frozen=True)
class ResultPage:
    measurements: Tuple[Measurement, ...]
    page_info: PageInfo


@dataclass(frozen=True)
class FetchOutcome:
    """Either a page of results or the error that prevented getting one."""

    page: Optional[ResultPage] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, page: ResultPage) -> FetchOutcome:
        return cls(page=page)

    @classmethod
    def failure(cls, error: FetchError) -> FetchOutcome:
        return cls(error=error)


def empty_page(page_size: int) -> ResultPage:
    return ResultPage(
        measurements=(),
        page_info=PageInfo(page=1, page_size=page_size, total_pages=0, total_results=0),
    )


class ResultsFetcher:
    """Issue one request per page and normalize whatever comes back.

    ``fetch_page`` never raises for expected failures; it returns a
    ``FetchOutcome`` and leaves applying it to the caller.
    """

    def __init__(
        self,
        base_url: str,
        page_size: int = 10,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.page_size = page_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ResultsFetcher:
        return self

    async def __aexit__(self, *_exc_info) -> None:
        await self.aclose()

    async def fetch_page(
        self, query: QueryFilter, page: int, page_size: Optional[int] = None
    ) -> FetchOutcome:
        size = page_size or self.page_size
        context = {"page": page, "page_size": size, "mode": query.mode.value}
        try:
            params = build_query_params(query, page, size)
            response = await self._client.get(RESULTS_PATH, params=params)
            result = self._parse_response(response, size)
        except FetchError as exc:
            logger.warning(
                "Fetching past results failed: %s",
                exc.message,
                extra={**context, "error_kind": exc.kind, "status": getattr(exc, "status", None)},
            )
            return FetchOutcome.failure(exc)
        except httpx.RequestError as exc:
            logger.warning(
                "Speed test service unreachable: %s",
                exc,
                extra={**context, "error_kind": NetworkError.kind},
            )
            return FetchOutcome.failure(NetworkError())

        logger.info(
            "Fetched past results",
            extra={
                **context,
                "status": response.status_code,
                "result_count": len(result.measurements),
            },
        )
        return FetchOutcome.success(result)

    @staticmethod
    def _parse_response(response: httpx.Response, page_size: int) -> ResultPage:
        text = response.text.strip()

        if not response.is_success:
            raise HTTPError(response.status_code, _error_message(text))

        # TODO: a 2xx with no body is indistinguishable from a truncated reply;
        # drop this once the API always sends an explicit empty page.
        if not text:
            return empty_page(page_size)

        try:
            payload = ResultsResponse.model_validate_json(text)
        except PayloadValidationError as exc:
            logger.debug("Unparseable results payload: %s", exc)
            raise ParseError() from exc

        return ResultPage(
            measurements=tuple(item.to_record() for item in payload.results),
            page_info=payload.pagination.to_record(page_size),
        )


def _error_message(text: str) -> str:
    if not text:
        return GENERIC_FETCH_MESSAGE
    try:
        payload = ErrorResponse.model_validate(json.loads(text))
    except (ValueError, PayloadValidationError):
        return GENERIC_FETCH_MESSAGE
    return payload.error or GENERIC_FETCH_MESSAGE
