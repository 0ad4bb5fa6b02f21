from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from typing import Any, Dict
from ..exceptions import ClassificationError, ErrorKind
from ..models import ClassifyWasteRequest
from ..services.classification_service import (
    ClassificationService,
    get_classification_service,
    RATE_LIMITED_MESSAGE,
    PAYMENT_REQUIRED_MESSAGE,
)
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Error kinds the caller can act on get their own status and fixed message
ERROR_RESPONSES = {
    ErrorKind.RATE_LIMITED: (429, RATE_LIMITED_MESSAGE),
    ErrorKind.PAYMENT_REQUIRED: (402, PAYMENT_REQUIRED_MESSAGE),
}

def cors_json_response(content: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=dict(CORS_HEADERS))

def error_response(error: ClassificationError) -> JSONResponse:
    status_code, message = ERROR_RESPONSES.get(error.kind, (500, error.message))
    return cors_json_response({"error": message}, status_code=status_code)

@router.options("/classify-waste")
async def classify_waste_preflight() -> Response:
    """CORS preflight, answered with an empty body"""
    return Response(status_code=200, headers=dict(CORS_HEADERS))

# Every method other than OPTIONS is a classification request
@router.api_route("/classify-waste", methods=["POST", "PUT", "PATCH", "DELETE", "GET"])
async def classify_waste(
    request: Request,
    service: ClassificationService = Depends(get_classification_service),
) -> JSONResponse:
    """
    Classify a waste image as biodegradable, plastic or metal

    - **imageData**: The image encoded as a data URI

    Returns the waste type, the model's confidence and reasoning, and disposal instructions
    """
    try:
        try:
            body = await request.json()
            payload = ClassifyWasteRequest.model_validate(body)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unreadable classification request: {str(e)}")
            raise ClassificationError(ErrorKind.INVALID_INPUT, "No image data provided") from e

        result = await service.classify(payload.image_data)
        return cors_json_response(result.model_dump(by_alias=True))

    except ClassificationError as e:
        logger.error(f"Classification error: {e.kind.value} - {e.message} {e.detail}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error processing classification request: {str(e)}")
        return cors_json_response({"error": str(e) or "Unknown error occurred"}, status_code=500)
