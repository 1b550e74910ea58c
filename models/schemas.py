"""Pydantic schemas for the speed-test API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models.records import Measurement, PageInfo


class MeasurementPayload(BaseModel):
    """One row of the ``results`` array."""

    id: Union[int, str]
    timestamp: datetime
    location: str
    download_speed: float
    upload_speed: float
    ping: float

    def to_record(self) -> Measurement:
        return Measurement(
            id=self.id,
            timestamp=self.timestamp,
            location=self.location,
            download_speed=self.download_speed,
            upload_speed=self.upload_speed,
            ping=self.ping,
        )


class PaginationPayload(BaseModel):
    """Server pagination block; the wire format is camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    # Out-of-range pages are clamped for display, not rejected.
    page: int
    page_size: int = Field(..., alias="pageSize")
    total_pages: int = Field(..., ge=0, alias="totalPages")
    total_results: int = Field(..., ge=0, alias="totalResults")

    def to_record(self, requested_page_size: int) -> PageInfo:
        return PageInfo(
            page=self.page,
            page_size=self.page_size if self.page_size > 0 else requested_page_size,
            total_pages=self.total_pages,
            total_results=self.total_results,
        )


class ResultsResponse(BaseModel):
    results: List[MeasurementPayload]
    pagination: PaginationPayload


class ErrorResponse(BaseModel):
    error: Optional[str] = None
