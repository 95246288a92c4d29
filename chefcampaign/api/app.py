"""
HTTP endpoint for campaign generation.

Exposes the campaign pipeline as a small JSON API:

- ``POST /generate-campaign`` generates a batch of variants, or edits a single
  image when the body carries ``"action": "edit"``
- ``POST /scan-text`` runs the OCR text scan on one image
- ``GET /health`` reports liveness

Errors are answered as ``{"error": message}``. Validation problems are echoed to
the caller with status 400; everything else is logged in full and answered with
a generic 500 message.
"""

import json
import secrets
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import (
    CAMPAIGN_FAILURE_MESSAGE,
    EDIT_FAILURE_MESSAGE,
    SCAN_FAILURE_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    INTERNAL_ERROR_MESSAGE
)
from chefcampaign.core.credentials import get_optional_api_key
from chefcampaign.core.error_handler import APIError, ValidationError, ConfigurationError
from chefcampaign.core.logging_config import get_logger
from chefcampaign.brief2concept.llm_templates import LLMParsingError
from chefcampaign.models import batch_to_dict
from chefcampaign.pipeline.pipeline_runner import CampaignPipeline

# Initialize logger
logger = get_logger(__name__)

CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def map_exception(error: Exception, failure_message: str) -> JSONResponse:
    """
    Translate a pipeline exception into an HTTP error response.

    Args:
        error: The exception raised while serving the request
        failure_message: Generic message for backend failures on this route

    Returns:
        JSONResponse: 400 with the message for validation errors, 500 with a
        generic message for everything else
    """
    if isinstance(error, ValidationError):
        logger.warning(f"Rejected request: {error}")
        return error_response(400, error.message)
    if isinstance(error, ConfigurationError):
        logger.error(f"Service misconfigured: {error}")
        return error_response(500, NOT_CONFIGURED_MESSAGE)
    if isinstance(error, (APIError, LLMParsingError)):
        logger.error(f"{failure_message}: {error}")
        return error_response(500, failure_message)

    logger.exception(f"Unexpected error: {error}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def is_authorized(request: Request) -> bool:
    """
    Check the bearer token against CHEFCAMPAIGN_API_TOKEN.

    Requests are always authorized when no token is configured.
    """
    expected = get_optional_api_key("service")
    if not expected:
        return True

    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return False
    return secrets.compare_digest(token.strip().encode("utf-8"), expected.encode("utf-8"))


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Request body must be valid JSON") from e

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def create_app(pipeline: Optional[CampaignPipeline] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        pipeline: Pipeline serving the requests. A default one is created when omitted.

    Returns:
        FastAPI: The configured application
    """
    app = FastAPI(title="chefcampaign")
    app.state.pipeline = pipeline or CampaignPipeline()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_config_value("server.cors_origins", ["*"]),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_HEADERS,
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/generate-campaign")
    async def generate_campaign(request: Request):
        if not is_authorized(request):
            return error_response(401, "Unauthorized")

        pipeline: CampaignPipeline = request.app.state.pipeline
        action = None
        try:
            body = await read_json_body(request)
            action = body.get("action")

            if action == "edit":
                image_url = await run_in_threadpool(
                    pipeline.edit_image, body.get("image"), body.get("editPrompt")
                )
                return {"imageUrl": image_url}

            variants = await run_in_threadpool(
                pipeline.generate_campaign, body.get("chefData"), body.get("imageModel")
            )
            return batch_to_dict(variants)
        except Exception as e:
            return map_exception(e, EDIT_FAILURE_MESSAGE if action == "edit" else CAMPAIGN_FAILURE_MESSAGE)

    @app.post("/scan-text")
    async def scan_text(request: Request):
        if not is_authorized(request):
            return error_response(401, "Unauthorized")

        pipeline: CampaignPipeline = request.app.state.pipeline
        try:
            body = await read_json_body(request)
            regions = await run_in_threadpool(pipeline.scan_text, body.get("image"))
            return {"regions": [region.to_dict() for region in regions]}
        except Exception as e:
            return map_exception(e, SCAN_FAILURE_MESSAGE)

    return app
