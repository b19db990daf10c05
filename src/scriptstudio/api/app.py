"""HTTP API for Script Studio (FastAPI)."""

import json
import os
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..config.schema import StudioConfig
from ..core.abc import Logger
from ..core.types import StudioResult
from ..runtime.accounts import AccountService
from ..runtime.export import FULL_SCRIPT_NAME, build_archive, part_filename
from ..runtime.studio import ScriptStudio

def _respond(result: StudioResult) -> JSONResponse:
    return JSONResponse(result.to_dict(), status_code=result.status)

def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse({"ok": False, "message": message}, status_code=status)

async def _read_json(request: Request) -> Any:
    """Parsed body, or None when it is not valid JSON."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}

def create_app(*, config: StudioConfig, studio: ScriptStudio,
               accounts: Optional[AccountService] = None,
               logger: Optional[Logger] = None) -> FastAPI:
    """
    Build the HTTP application around already-wired services.

    Args:
        config: Validated Script Studio config
        studio: Script studio service
        accounts: Account service, or None when no token secret is configured
        logger: Optional structured logger

    Returns:
        FastAPI: Application exposing the /api routes
    """
    app = FastAPI(title="Script Studio", version="0.1.0")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True,
                       allow_methods=["*"], allow_headers=["*"])
    cookie_name = config.auth.cookie_name

    def owner_of(request: Request) -> Optional[str]:
        if accounts is None:
            return None
        token = request.cookies.get(cookie_name)
        auth_header = request.headers.get("authorization", "")
        if not token and auth_header.lower().startswith("bearer "):
            token = auth_header[7:].strip()
        return accounts.owner_from_token(token)

    def with_session_cookie(result: StudioResult) -> JSONResponse:
        response = _respond(result)
        token = result.data.get("token")
        if result.ok and token:
            response.set_cookie(cookie_name, token, httponly=True, secure=config.auth.secure_cookies,
                                samesite="lax", path="/",
                                max_age=config.auth.token_ttl_days * 24 * 3600)
        return response

    def record_parts(script: dict) -> list:
        return studio.segment(script["content"], script["amount"]).texts

    @app.get("/api/health")
    def health():
        return {"ok": True, "provider": config.generation.provider,
                "generatorReady": studio.generator is not None}

    @app.post("/api/gemini")
    async def generate(request: Request):
        payload = await _read_json(request)
        if payload is None:
            return _error(400, "Invalid JSON body.")
        result = await run_in_threadpool(studio.generate, payload, owner_of(request))
        return _respond(result)

    @app.post("/api/split")
    async def split(request: Request):
        payload = await _read_json(request)
        if payload is None:
            return _error(400, "Invalid JSON body.")
        return _respond(studio.split(payload))

    @app.get("/api/myscripts")
    def list_scripts(request: Request):
        return _respond(studio.history(owner_of(request)))

    @app.post("/api/myscripts")
    async def save_script(request: Request):
        payload = await _read_json(request)
        if payload is None:
            return _error(400, "Invalid JSON body.")
        return _respond(await run_in_threadpool(studio.save, payload, owner_of(request)))

    @app.get("/api/myscripts/{record_id}/parts/{number}")
    def download_part(record_id: str, number: int, request: Request):
        found = studio.get(record_id, owner_of(request))
        if not found.ok:
            return _respond(found)
        parts = record_parts(found.data["script"])
        if number < 1 or number > len(parts):
            return _error(404, "Part not found.")
        return PlainTextResponse(parts[number - 1], headers=_attachment(part_filename(number)))

    @app.get("/api/myscripts/{record_id}/full")
    def download_full(record_id: str, request: Request):
        found = studio.get(record_id, owner_of(request))
        if not found.ok:
            return _respond(found)
        return PlainTextResponse(found.data["script"]["content"], headers=_attachment(FULL_SCRIPT_NAME))

    @app.get("/api/myscripts/{record_id}/archive")
    def download_archive(record_id: str, request: Request):
        found = studio.get(record_id, owner_of(request))
        if not found.ok:
            return _respond(found)
        script = found.data["script"]
        archive = build_archive(record_parts(script), full_script=script["content"])
        return Response(archive, media_type="application/zip",
                        headers=_attachment(f"script-{script['id']}.zip"))

    @app.post("/api/auth/signup")
    async def signup(request: Request):
        if accounts is None:
            return _error(500, f"{config.auth.secret_env} is not set on the server.")
        payload = await _read_json(request)
        if payload is None:
            return _error(400, "Invalid JSON body.")
        return with_session_cookie(await run_in_threadpool(accounts.signup, payload))

    @app.post("/api/auth/login")
    async def login(request: Request):
        if accounts is None:
            return _error(500, f"{config.auth.secret_env} is not set on the server.")
        payload = await _read_json(request)
        if payload is None:
            return _error(400, "Invalid JSON body.")
        return with_session_cookie(await run_in_threadpool(accounts.login, payload))

    if logger:
        logger.info("api_ready", provider=config.generation.provider,
                    history=config.history.backend, auth=accounts is not None)
    return app

def build_app(config: StudioConfig, logger: Optional[Logger] = None) -> FastAPI:
    """Wire stores, provider and identity from a config and build the app."""
    from ..auth.tokens import TokenSigner
    from ..providers.factory import create_generator
    from ..storage import create_stores

    script_store, user_store = create_stores(config)
    studio = ScriptStudio(config=config, generator=create_generator(config, logger),
                          store=script_store, logger=logger)

    accounts = None
    secret = os.environ.get(config.auth.secret_env)
    if secret:
        accounts = AccountService(users=user_store,
                                  signer=TokenSigner(secret, ttl_days=config.auth.token_ttl_days),
                                  config=config, logger=logger)
    elif logger:
        logger.warn("auth_disabled", reason=f"{config.auth.secret_env} is not set")

    return create_app(config=config, studio=studio, accounts=accounts, logger=logger)

def app_from_env() -> FastAPI:
    """Application factory for ``uvicorn --factory scriptstudio.api.app:app_from_env``."""
    from ..config.loader import load_config
    from ..core.console import ConsoleLogger

    path = os.environ.get("SCRIPTSTUDIO_CONFIG")
    config = load_config(path) if path else StudioConfig()
    return build_app(config, logger=ConsoleLogger())
