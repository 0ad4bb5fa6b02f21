import httpx
import logging
from typing import Any, Dict, Optional

from app.config import Settings, get_settings
from app.exceptions import ClassificationError, ErrorKind
from app.models import ClassificationResult
from app.services.disposal_catalog import advice_for
from app.services.response_parser import parse_response

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a waste classification expert. Analyze the image and classify the waste item as one of: "
    "biodegradable, plastic, or metal. Respond ONLY with a JSON object in this exact format: "
    '{"type": "biodegradable|plastic|metal", "confidence": 0.0-1.0, "reasoning": "brief explanation"}. '
    "Be strict and accurate."
)

USER_PROMPT = "Classify this waste item. What type of waste is this?"

RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
PAYMENT_REQUIRED_MESSAGE = "AI service requires additional credits. Please contact support."
UPSTREAM_FAILURE_MESSAGE = "Failed to classify image"


class ClassificationService:
    """
    Classify a waste image with a vision-capable chat model.

    Each call makes exactly one upstream request and keeps no state between calls.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def build_request(self, image_data: str) -> Dict[str, Any]:
        return {
            "model": self.settings.AI_MODEL,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_PROMPT},
                        {"type": "image_url", "image_url": {"url": image_data}},
                    ],
                },
            ],
        }

    async def classify(self, image_data: Optional[str]) -> ClassificationResult:
        """
        Classify a waste image and attach disposal instructions.

        Args:
            image_data: Image encoded as a data URI, passed to the model verbatim

        Returns:
            ClassificationResult for the image

        Raises:
            ClassificationError: for every failure, see ErrorKind
        """
        if not image_data:
            raise ClassificationError(ErrorKind.INVALID_INPUT, "No image data provided")

        api_key = self.settings.AI_GATEWAY_API_KEY
        if not api_key:
            raise ClassificationError(ErrorKind.MISCONFIGURED, "AI_GATEWAY_API_KEY is not configured")

        result_text = await self._request_reply(image_data, api_key)
        logger.debug(f"Raw AI response: {result_text[:500]}...")

        classification = parse_response(result_text)
        advice = advice_for(classification.category)

        return ClassificationResult(
            waste_type=advice.category,
            confidence=classification.confidence,
            reasoning=classification.reasoning,
            disposal_instructions=advice.instructions,
        )

    async def _request_reply(self, image_data: str, api_key: str) -> str:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.settings.AI_TIMEOUT_SECONDS, transport=self._transport) as client:
                response = await client.post(
                    self.settings.AI_GATEWAY_URL,
                    json=self.build_request(image_data),
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"AI gateway request failed: {str(e)}")
            raise ClassificationError(
                ErrorKind.UPSTREAM_FAILURE,
                UPSTREAM_FAILURE_MESSAGE,
                detail={"reason": str(e)},
            ) from e

        if not response.is_success:
            raise self._status_error(response)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected AI gateway response: {response.text[:500]}")
            raise ClassificationError(
                ErrorKind.UPSTREAM_FAILURE,
                UPSTREAM_FAILURE_MESSAGE,
                detail={"status": response.status_code, "body": response.text},
            ) from e

        if not isinstance(content, str):
            logger.error(f"AI gateway returned non-text content: {content!r}")
            raise ClassificationError(
                ErrorKind.UPSTREAM_FAILURE,
                UPSTREAM_FAILURE_MESSAGE,
                detail={"status": response.status_code, "body": response.text},
            )

        return content

    @staticmethod
    def _status_error(response: httpx.Response) -> ClassificationError:
        if response.status_code == 429:
            logger.warning("AI gateway rate limit hit")
            return ClassificationError(ErrorKind.RATE_LIMITED, RATE_LIMITED_MESSAGE)
        if response.status_code == 402:
            logger.warning("AI gateway reports exhausted credits")
            return ClassificationError(ErrorKind.PAYMENT_REQUIRED, PAYMENT_REQUIRED_MESSAGE)

        logger.error(f"AI gateway error: {response.status_code} - {response.text}")
        return ClassificationError(
            ErrorKind.UPSTREAM_FAILURE,
            UPSTREAM_FAILURE_MESSAGE,
            detail={"status": response.status_code, "body": response.text},
        )


def get_classification_service() -> ClassificationService:
    return ClassificationService(get_settings())
