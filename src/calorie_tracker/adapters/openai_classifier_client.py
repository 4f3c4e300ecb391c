"""OpenAI Responses API client for food classification."""

import base64
import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.recognition import ClassifierClient

CLASSIFIER_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "label": {"type": "string"},
        "confidence_percent": {"type": "integer", "minimum": 0, "maximum": 100},
    },
    "required": ["label", "confidence_percent"],
    "additionalProperties": False,
}

CLASSIFIER_PROMPT = (
    "Identify the main dish in the image. "
    "Return a short English food label and your confidence as a percentage "
    "(0-100)."
)


@dataclass
class OpenAIClassifierClient(ClassifierClient):
    """Classifier backed by OpenAI Responses API structured outputs."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str | None, model: str, store: bool = False
    ) -> "OpenAIClassifierClient":
        """Create an OpenAI classifier client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model, store=store)

    async def classify(self, image_bytes: bytes) -> dict[str, object]:
        """Call OpenAI with the image and parse the structured label."""
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": CLASSIFIER_PROMPT},
                        {"type": "input_image", "image_url": _to_data_url(image_bytes)},
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_label",
                    "strict": True,
                    "schema": CLASSIFIER_SCHEMA,
                }
            },
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
