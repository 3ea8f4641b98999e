"""
FastAPI server exposing the token issuance endpoint.

The browser-side session controller calls ``POST /api/create-web-call`` right
before each call start. The endpoint creates a web call with the Retell API
and hands back the single-use access token and the call id. Retell
credentials never leave the server.
"""

from pathlib import Path
from typing import Optional

import dotenv
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from voice_session import __version__
from voice_session.config.constants import (
    CREATE_WEB_CALL_FAILED_MESSAGE,
    CREATE_WEB_CALL_PATH,
)
from voice_session.config.logging_config import configure_logging
from voice_session.config.settings import RetellSettings
from voice_session.exceptions import ConfigurationError, ProviderError
from voice_session.models.call_schemas import CreateWebCallResponse, ErrorResponse
from voice_session.services.web_call_issuer import WebCallIssuer

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

# Configure logging
logger = configure_logging()

APP_TITLE = "Voice Session"
APP_DESCRIPTION = "Token issuance for live voice calls with a Retell agent"

router = APIRouter()


def get_issuer(request: Request) -> WebCallIssuer:
    """Dependency returning the issuer built for this app."""
    return request.app.state.issuer


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


@router.post(
    CREATE_WEB_CALL_PATH,
    response_model=CreateWebCallResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_web_call(issuer: WebCallIssuer = Depends(get_issuer)):
    """Create a web call and return its access token and call id.

    Returns:
        200 with ``{"access_token", "call_id"}`` on success, otherwise
        ``{"error"}`` with status 500 for missing configuration or the
        provider's status for a rejected request.
    """
    try:
        credentials = await issuer.create_web_call()
    except ConfigurationError as e:
        logger.error(f"Cannot create web call: {e}")
        return _error_response(500, str(e))
    except ProviderError as e:
        status_code = e.status_code if e.status_code and e.status_code >= 400 else 500
        return _error_response(status_code, str(e) or CREATE_WEB_CALL_FAILED_MESSAGE)
    except Exception as e:
        logger.error(f"Retell createWebCall error: {e}", exc_info=True)
        return _error_response(500, str(e) or CREATE_WEB_CALL_FAILED_MESSAGE)

    return CreateWebCallResponse(
        access_token=credentials.access_token, call_id=credentials.call_id
    )


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Status information, including whether Retell credentials are set.
    """
    settings: RetellSettings = request.app.state.settings
    return {
        "status": "healthy",
        "retell_api_key_configured": bool(settings.api_key),
        "retell_agent_id_configured": bool(settings.agent_id),
    }


@router.get("/")
async def root():
    """Root endpoint to display basic information about the API."""
    return {
        "name": APP_TITLE,
        "description": APP_DESCRIPTION,
        "version": __version__,
        "endpoints": {
            CREATE_WEB_CALL_PATH: "Create a web call and return its access token",
            "/health": "Health check endpoint",
        },
    }


def create_app(settings: Optional[RetellSettings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Retell settings; loaded from the environment when omitted
    """
    settings = settings or RetellSettings.load_from_env()

    app = FastAPI(title=APP_TITLE, description=APP_DESCRIPTION, version=__version__)
    app.state.settings = settings
    app.state.issuer = WebCallIssuer(settings)
    app.include_router(router)

    if not settings.is_configured:
        logger.warning("RETELL_API_KEY or RETELL_AGENT_ID not set, web calls will fail")

    return app


app = create_app()
