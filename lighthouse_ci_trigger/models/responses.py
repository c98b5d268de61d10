"""Pydantic models for Lighthouse CI service responses."""

from pydantic import BaseModel, StrictFloat, StrictInt


class ChromeRunResponse(BaseModel):
    """Response of the run_on_chrome endpoint."""

    score: StrictInt | StrictFloat


class WptRunData(BaseModel):
    """Data block of the run_on_wpt response."""

    target_url: str


class WptRunResponse(BaseModel):
    """Response of the run_on_wpt endpoint."""

    data: WptRunData
