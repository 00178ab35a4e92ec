"""FastAPI server exposing the closet calendar and analytics endpoints."""

from datetime import date
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from closet_app.app import ClosetApp
from closet_app.logging_config import correlation_context
from logic.validation import OutfitCreate, UsageCreate, validation_failure
from models.errors import InvalidRecord

app = FastAPI(title="Closet Analytics", version="0.1.0")
CORRELATION_HEADER = "X-Correlation-ID"


@lru_cache(maxsize=1)
def get_closet() -> ClosetApp:
    """Build the app lazily so importing this module has no side effects."""

    return ClosetApp()


@app.middleware("http")
async def correlation_middleware(request: Request, call_next):
    with correlation_context(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


@app.exception_handler(InvalidRecord)
async def invalid_record_handler(_: Request, exc: InvalidRecord) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), **exc.as_dict()})


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content=validation_failure("invalid request", exc))


@app.get("/healthz")
async def healthcheck(closet: ClosetApp = Depends(get_closet)) -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "closet-analytics",
        "environment": closet.config.environment or "local",
    }


@app.get("/users/{user_id}")
def get_user(user_id: str, closet: ClosetApp = Depends(get_closet)) -> dict:
    profile = closet.analytics.user_profile(user_id=user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="user_not_found")
    return profile


@app.get("/users/{user_id}/analytics/overview")
def analytics_overview(user_id: str, closet: ClosetApp = Depends(get_closet)) -> dict:
    return closet.analytics.overview(user_id=user_id)


@app.get("/users/{user_id}/analytics/categories")
def analytics_categories(user_id: str, closet: ClosetApp = Depends(get_closet)) -> list:
    return closet.analytics.categories(user_id=user_id)


@app.get("/users/{user_id}/analytics/colours")
def analytics_colours(user_id: str, closet: ClosetApp = Depends(get_closet)) -> list:
    return closet.analytics.colours(user_id=user_id)


@app.get("/users/{user_id}/analytics/most-worn")
def analytics_most_worn(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100),
    closet: ClosetApp = Depends(get_closet),
) -> list:
    return closet.analytics.most_worn(user_id=user_id, limit=limit or closet.config.worn_list_limit)


@app.get("/users/{user_id}/analytics/least-worn")
def analytics_least_worn(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100),
    closet: ClosetApp = Depends(get_closet),
) -> list:
    return closet.analytics.least_worn(user_id=user_id, limit=limit or closet.config.worn_list_limit)


@app.get("/users/{user_id}/analytics/never-worn")
def analytics_never_worn(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100),
    closet: ClosetApp = Depends(get_closet),
) -> list:
    return closet.analytics.never_worn(user_id=user_id, limit=limit or closet.config.worn_list_limit)


@app.get("/users/{user_id}/analytics/wear-audit")
def analytics_wear_audit(user_id: str, closet: ClosetApp = Depends(get_closet)) -> list:
    """Garments whose stored wear count disagrees with their usage history."""

    return closet.analytics.wear_count_audit(user_id=user_id)


@app.get("/users/{user_id}/calendar/week")
def calendar_week(
    user_id: str,
    day: Optional[date] = None,
    closet: ClosetApp = Depends(get_closet),
) -> list:
    return closet.analytics.week(user_id=user_id, day=day)


@app.get("/users/{user_id}/calendar/streak")
def calendar_streak(
    user_id: str,
    today: Optional[date] = None,
    closet: ClosetApp = Depends(get_closet),
) -> dict:
    return closet.analytics.streak(user_id=user_id, today=today)


@app.get("/users/{user_id}/calendar/{year}/{month}")
def calendar_month(user_id: str, year: int, month: int, closet: ClosetApp = Depends(get_closet)) -> dict:
    return closet.analytics.calendar_month(user_id=user_id, year=year, month=month)


@app.get("/users/{user_id}/outfits")
def list_outfits(user_id: str, closet: ClosetApp = Depends(get_closet)) -> list:
    return closet.analytics.outfits(user_id=user_id)


@app.post("/users/{user_id}/outfits", status_code=201)
def log_outfit(user_id: str, request: OutfitCreate, closet: ClosetApp = Depends(get_closet)) -> dict:
    return closet.analytics.log_outfit(user_id=user_id, outfit_data=request.model_dump())


@app.delete("/users/{user_id}/outfits/{outfit_id}", status_code=204)
def delete_outfit(user_id: str, outfit_id: str, closet: ClosetApp = Depends(get_closet)) -> None:
    if not closet.analytics.delete_outfit(user_id=user_id, outfit_id=outfit_id):
        raise HTTPException(status_code=404, detail="outfit_not_found")


@app.post("/users/{user_id}/usages", status_code=201)
def record_usage(user_id: str, request: UsageCreate, closet: ClosetApp = Depends(get_closet)) -> dict:
    try:
        return closet.analytics.record_usage(user_id=user_id, usage_data=request.model_dump())
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="garment_not_found") from exc
    except InvalidRecord:
        raise
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
