"""
FastAPI application - HTTP surface for Browser Agent.

Usage:
    browser-agent serve

Or directly:
    uvicorn browser_agent.server:create_app --factory --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from . import __version__
from .agent import BrowserAgent, Completer, SessionProvider
from .browser_manager import SharedBrowser
from .config import AgentConfig
from .llm_client import create_completion_client
from .logger import RunLogger
from .screenshots import SCREENSHOTS_ROUTE, ScreenshotStore


logger = logging.getLogger(__name__)


class AgentRequest(BaseModel):
    query: str


class AgentResponse(BaseModel):
    answer: str


class ErrorResponse(BaseModel):
    error: str


def create_app(
    config: Optional[AgentConfig] = None,
    browser: Optional[SessionProvider] = None,
    completion_client: Optional[Completer] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Agent configuration (read from the environment if omitted)
        browser: Shared browser override; a SharedBrowser is created otherwise
        completion_client: Completion client override

    Returns:
        Configured FastAPI app
    """
    config = config or AgentConfig()
    screenshots = ScreenshotStore(config.screenshots_dir)
    # StaticFiles checks the directory when mounted
    config.ensure_directories()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the shared collaborators; the browser launches on first request."""
        is_valid, message = config.validate()
        if not is_valid:
            logger.warning("Configuration problem: %s", message)

        owns_browser = browser is None
        owns_client = completion_client is None
        app.state.browser = browser or SharedBrowser(config)
        app.state.completion_client = completion_client or create_completion_client(config)
        logger.info(
            "Browser agent ready (provider=%s, model=%s)",
            config.provider.value,
            config.effective_model,
        )
        yield
        if owns_client:
            await app.state.completion_client.close()
        if owns_browser:
            await app.state.browser.close()

    app = FastAPI(
        title="Browser Agent",
        version=__version__,
        description="Lets a completion model drive a headless browser to answer a query.",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.screenshots = screenshots

    app.mount(
        SCREENSHOTS_ROUTE,
        StaticFiles(directory=str(screenshots.directory)),
        name="screenshots",
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Same error shape as agent failures
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(status_code=422, content={"error": f"Invalid request: {details}"})

    @app.post(
        "/agent",
        response_model=AgentResponse,
        responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["agent"],
    )
    async def run_agent_endpoint(body: AgentRequest, request: Request):
        base_url = str(request.base_url).rstrip("/")
        agent = BrowserAgent(
            body.query,
            config,
            request.app.state.completion_client,
            request.app.state.browser,
            screenshots=screenshots,
            base_url=base_url,
            run_logger=RunLogger(body.query, runs_dir=config.runs_dir),
        )
        result = await agent.run()

        if result.success:
            return AgentResponse(answer=result.final_answer)
        return JSONResponse(status_code=500, content={"error": result.error})

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": __version__}

    return app


def run_server(config: AgentConfig) -> None:
    """Serve the app with uvicorn."""
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_config=None,
    )
