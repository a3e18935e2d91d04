"""
HTTP API
========

FastAPI front end for the tracker.

Usage:
    uvicorn series_tracker.api.app:app --reload --port 8000
"""

import logging
from typing import Optional, List, Dict, Any

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from .. import __version__
from ..core.config import TrackerConfig, get_config
from ..workflow.tracker import SeriesTracker, CommandResult

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "InvalidInput": 422,
    "NotFound": 404,
    "MissingSeasonCount": 500,
}


class CreateSeriesRequest(BaseModel):
    """Request model for adding a series."""
    name: str
    total_seasons: int = Field(alias="totalSeasons")
    episodes_per_season: Optional[int] = Field(default=None, alias="episodesPerSeason")
    season_episode_map: Optional[Dict[int, int]] = Field(default=None, alias="seasonEpisodeMap")

    model_config = {"populate_by_name": True}


class SeriesResponse(BaseModel):
    """A series as shown to clients."""
    id: int
    name: str
    totalSeasons: int
    episodesPerSeason: Optional[int] = None
    seasonEpisodeMap: Optional[Dict[str, int]] = None
    currentSeason: int
    currentEpisode: int
    isCompleted: bool
    totalEpisodes: int
    position: str


class ThemeResponse(BaseModel):
    isDarkTheme: bool


def _to_response(series) -> Dict[str, Any]:
    data = series.to_dict()
    data["totalEpisodes"] = series.total_episodes
    data["position"] = series.position_label
    return data


def _unwrap(result: CommandResult) -> Dict[str, Any]:
    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_code, 400),
            detail=result.error.to_dict(),
        )
    return _to_response(result.series)


def create_app(
    tracker: Optional[SeriesTracker] = None,
    config: Optional[TrackerConfig] = None,
) -> FastAPI:
    """
    Build the API around ``tracker`` (or a tracker built from ``config``).

    The tracker is started on application startup and stopped on shutdown.
    """
    app = FastAPI(
        title="Series Tracker API",
        description="REST API for tracking watch progress across TV series",
        version=__version__,
    )
    app.state.tracker = tracker or SeriesTracker(config=config)

    @app.on_event("startup")
    async def startup():
        await app.state.tracker.start()

    @app.on_event("shutdown")
    async def shutdown():
        await app.state.tracker.stop()

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Series Tracker",
            "version": __version__,
            "endpoints": ["/series", "/theme", "/health"],
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        worker = app.state.tracker.worker
        return {
            "status": "healthy",
            "series": len(app.state.tracker.catalog),
            "saves_completed": worker.saves_completed,
            "saves_failed": worker.saves_failed,
        }

    @app.get("/series", response_model=List[SeriesResponse])
    async def list_series():
        return [_to_response(s) for s in app.state.tracker.list_series()]

    @app.post("/series", response_model=SeriesResponse, status_code=201)
    async def create_series(request: CreateSeriesRequest):
        result = app.state.tracker.create_series(
            request.name,
            request.total_seasons,
            episodes_per_season=request.episodes_per_season,
            season_episode_map=request.season_episode_map,
        )
        return _unwrap(result)

    @app.get("/series/{series_id}", response_model=SeriesResponse)
    async def get_series(series_id: int):
        return _unwrap(app.state.tracker.find_series(series_id))

    @app.post("/series/{series_id}/advance", response_model=SeriesResponse)
    async def advance(series_id: int):
        return _unwrap(app.state.tracker.advance(series_id))

    @app.post("/series/{series_id}/rewind", response_model=SeriesResponse)
    async def rewind(series_id: int):
        return _unwrap(app.state.tracker.rewind(series_id))

    @app.delete("/series/{series_id}", status_code=204)
    async def delete_series(series_id: int):
        app.state.tracker.delete_series(series_id)
        return Response(status_code=204)

    @app.get("/theme", response_model=ThemeResponse)
    async def get_theme():
        return {"isDarkTheme": app.state.tracker.is_dark_theme}

    @app.post("/theme/toggle", response_model=ThemeResponse)
    async def toggle_theme():
        return {"isDarkTheme": app.state.tracker.toggle_theme()}

    return app


_default_app: Optional[FastAPI] = None


def __getattr__(name: str):
    # `uvicorn series_tracker.api.app:app` builds one app from the loaded config
    global _default_app
    if name == "app":
        if _default_app is None:
            _default_app = create_app(config=get_config())
        return _default_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
