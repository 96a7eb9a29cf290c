"""FastAPI server exposing outfit generation, favorites and sharing."""

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from stilo_app.app import StiloApp
from stilo_app.logging_config import configure_logging
from logic.errors import DecodeFailure, GenerationFailure, RequestSuperseded
from logic.sharing import decode_share_token
from logic.validation import OutfitSuggestionPayload, WeatherPayload
from models.taxonomy import DEFAULT_GENDER, DEFAULT_STYLE, Gender, Occasion, StylePreference, catalog


class OutfitRequest(BaseModel):
    """Request payload for one outfit suggestion."""

    occasion: Occasion
    gender: Gender = DEFAULT_GENDER
    style_preference: StylePreference = DEFAULT_STYLE
    weather: WeatherPayload | None = Field(None, description="Explicit weather; wins over location")
    location: str | None = Field(None, description="Look up mock weather for this place")
    session_id: str | None = Field(None, description="Newer requests supersede older ones per session")


def _stilo(request: Request) -> StiloApp:
    return request.app.state.stilo


def create_app(stilo: StiloApp | None = None) -> FastAPI:
    """Build the API around an existing :class:`StiloApp` or a fresh one."""

    configure_logging()
    api = FastAPI(title="Stilo", version="0.1.0")
    api.state.stilo = stilo or StiloApp()

    @api.get("/healthz")
    async def healthcheck(request: Request) -> dict:
        """Lightweight readiness check."""

        config = _stilo(request).config
        return {
            "status": "ok",
            "service": "stilo",
            "environment": config.environment or "local",
            "text_model": config.text_model,
            "image_model": config.image_model,
        }

    @api.get("/catalog")
    async def get_catalog() -> dict:
        return catalog()

    @api.get("/weather")
    async def get_weather(request: Request, location: str | None = None) -> dict:
        try:
            return _stilo(request).current_weather(location).to_dict()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @api.post("/outfits")
    async def create_outfit(payload: OutfitRequest, request: Request) -> dict:
        """Generate a suggestion with garment images."""

        try:
            suggestion = await _stilo(request).suggest_outfit(
                payload.occasion,
                gender=payload.gender,
                style_preference=payload.style_preference,
                weather=payload.weather.to_weather() if payload.weather else None,
                location=payload.location,
                session_id=payload.session_id,
            )
        except GenerationFailure as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except RequestSuperseded as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return suggestion.to_dict()

    @api.get("/favorites")
    async def list_favorites(request: Request) -> list:
        return [favorite.to_dict() for favorite in _stilo(request).list_favorites()]

    @api.post("/favorites/toggle")
    async def toggle_favorite(payload: OutfitSuggestionPayload, request: Request) -> dict:
        stilo = _stilo(request)
        favorited = stilo.toggle_favorite(payload.to_suggestion())
        return {
            "favorited": favorited,
            "favorites": [favorite.to_dict() for favorite in stilo.list_favorites()],
        }

    @api.delete("/favorites/{title:path}")
    async def remove_favorite(title: str, request: Request) -> list:
        return [favorite.to_dict() for favorite in _stilo(request).remove_favorite(title)]

    @api.post("/share")
    async def share_outfit(payload: OutfitSuggestionPayload, request: Request) -> dict:
        stilo = _stilo(request)
        suggestion = payload.to_suggestion()
        return {"token": stilo.share_token(suggestion), "url": stilo.share_url(suggestion)}

    @api.get("/share/{token:path}")
    async def open_share(token: str) -> dict:
        try:
            return decode_share_token(token).to_dict()
        except DecodeFailure as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    return api


_APP: FastAPI | None = None


def get_app() -> FastAPI:
    """Expose a lazily built FastAPI instance for ASGI servers."""

    global _APP
    if _APP is None:
        _APP = create_app()
    return _APP


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
