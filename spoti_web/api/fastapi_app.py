from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from spoti_web.api.auth.routes import router as auth_router
from spoti_web.api.library.routes import router as library_router
from spoti_web.api.party.routes import router as party_router
from spoti_web.api.player.routes import router as player_router
from spoti_web.config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from spoti_web.core import configure_logging, log_warning
from spoti_web.spotify import SpotiWebError

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="Spoti Web API",
    version="1.0.0",
    description="Backend API for Spotify playback and the party queue.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["access_token", "refresh_token"],
)


@app.exception_handler(SpotiWebError)
async def handle_spotiweb_error(
    request: Request, exc: SpotiWebError
) -> PlainTextResponse:
    status_code = exc.status or 500
    log_warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return PlainTextResponse(str(exc), status_code=status_code)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    return PlainTextResponse("Error: Invalid request", status_code=400)


# Auth routes
app.include_router(auth_router, prefix=API_PREFIX, tags=["auth"])

# Library routes
app.include_router(library_router, prefix=API_PREFIX, tags=["library"])

# Player routes
app.include_router(player_router, prefix=API_PREFIX, tags=["player"])

# Party queue routes
app.include_router(party_router, prefix=API_PREFIX, tags=["party"])
