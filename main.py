"""
Main API module for the Lambda Gateway demo backend.

Responsibilities:
    - Expose the REST endpoints: home, profiles/users, quotes, stats, login
    - Count every handled request and report process statistics
    - Attach permissive CORS headers to every response and answer preflights

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - One ServiceState per app owns the directory, metrics, quote catalog
      and authenticator; routes reach it through closures, not globals.
    - Request counting is a route dependency, so it runs before the handler
      body and still counts requests whose handler fails.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from lambda_gateway.auth.secret_provider import SecretProvider
from lambda_gateway.config import Settings, get_settings
from lambda_gateway.quotes.catalog import QuoteCatalog
from lambda_gateway.schemas import LoginRequest, ProfileRequest
from lambda_gateway.state import ServiceState
from lambda_gateway.utils import utc_now_iso

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_app(
    settings: Optional[Settings] = None,
    secret_provider: Optional[SecretProvider] = None,
    catalog: Optional[QuoteCatalog] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        settings (Optional[Settings]): Defaults to the current environment.
        secret_provider (Optional[SecretProvider]): Overrides the configured secret backend.
        catalog (Optional[QuoteCatalog]): Overrides the default quote catalog.

    Returns:
        FastAPI: A configured application with its own ServiceState,
                 also exposed as `app.state.service`.
    """
    settings = settings or get_settings()

    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)
    log = logging.getLogger("lambda_gateway")

    state = ServiceState.create(settings=settings, secret_provider=secret_provider, catalog=catalog)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Lambda Gateway started (secret backend: %s)", settings.SECRET_BACKEND)
        yield
        state.close()

    app = FastAPI(
        title="Lambda Gateway",
        description="Demo backend: in-memory user profiles, quotes, stats and keyed-hash login",
        docs_url="/docs",
        lifespan=lifespan,
    )
    app.state.service = state

    # ----------------------------------------------------------------
    # Cross-cutting: CORS headers and request counting
    # ----------------------------------------------------------------
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    def count_request() -> int:
        """Route dependency: count this request and return its number."""
        return state.metrics.increment()

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/")
    def home(request_number: int = Depends(count_request)) -> Dict[str, Any]:
        """Welcome message with the number of this request."""
        log.info("Home route request #%d", request_number)
        return {
            "message": "Welcome to the API! 🚀",
            "timestamp": utc_now_iso(),
            "requestNumber": request_number,
        }

    @app.post("/profile", status_code=201)
    def create_profile(req: ProfileRequest, _: int = Depends(count_request)) -> Dict[str, Any]:
        """
        Create a user profile. A missing or empty email defaults to
        "{username}@example.com".
        """
        user = state.directory.create_user(req.username, req.email)
        log.info("Created profile id=%s username=%s", user.id, user.username)
        return {
            "message": "Profile created successfully! 🎉",
            "user": user.to_dict(),
            "totalUsers": state.directory.count(),
        }

    @app.get("/users")
    def get_users(_: int = Depends(count_request)) -> Dict[str, Any]:
        users = state.directory.list_users()
        log.info("Listing %d users", len(users))
        return {
            "message": "Users retrieved successfully",
            "users": [u.to_dict() for u in users],
            "count": len(users),
        }

    @app.delete("/users")
    @app.delete("/users/")
    def delete_user_without_id(_: int = Depends(count_request)) -> JSONResponse:
        log.info("Delete user request without an id")
        return _message(400, "User ID is required")

    @app.delete("/users/{user_id}")
    def delete_user(user_id: str, _: int = Depends(count_request)) -> JSONResponse:
        """
        Delete a user by id.

        Returns 400 for a blank id and 404 for an unknown one.
        """
        if not user_id.strip():
            return _message(400, "User ID is required")

        if not state.directory.delete_user(user_id):
            log.info("Delete user id=%s: not found", user_id)
            return _message(404, "User not found")

        log.info("Deleted user id=%s", user_id)
        return JSONResponse({
            "message": "User deleted successfully! 🗑️",
            "remainingUsers": state.directory.count(),
        })

    @app.get("/quote")
    def get_random_quote(_: int = Depends(count_request)) -> Dict[str, Any]:
        quote = state.catalog.random_quote()
        return {"quote": quote.to_dict(), "timestamp": utc_now_iso()}

    @app.get("/stats")
    def get_stats(_: int = Depends(count_request)) -> Dict[str, Any]:
        """Process statistics; totalRequests includes this request."""
        return state.metrics.snapshot().to_dict()

    @app.post("/login")
    async def login(request: Request, _: int = Depends(count_request)) -> JSONResponse:
        """
        Return the HMAC-SHA256 digest of the username under the configured key.

        Any failure (unparseable body, missing or non-string username, secret
        unavailable or malformed) is logged and reported as a bare 500; no
        internal detail is returned.
        """
        try:
            req = LoginRequest.model_validate(await request.json())
            digest = await run_in_threadpool(state.auth.authenticate, req.username)
        except Exception:
            log.exception("Error in login route")
            return _message(500, "Internal Server Error")
        return JSONResponse({"username": digest})

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
