"""Hugging Face Inference API client for food classification."""

from dataclasses import dataclass

import httpx

from calorie_tracker.services.recognition import ClassifierClient


@dataclass
class HttpxHuggingFaceClassifierClient(ClassifierClient):
    """Classifier backed by a hosted image-classification model."""

    api_key: str | None
    model_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str | None, model_url: str
    ) -> "HttpxHuggingFaceClassifierClient":
        """Create a classifier client with a managed httpx session."""
        return cls(
            api_key=api_key, model_url=model_url, http_client=httpx.AsyncClient()
        )

    async def classify(self, image_bytes: bytes) -> dict[str, object]:
        """Post raw image bytes and return the top-scoring label."""
        response = await self.http_client.post(
            self.model_url,
            content=image_bytes,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/octet-stream",
            },
            timeout=30,
        )
        response.raise_for_status()
        predictions = response.json()
        if not isinstance(predictions, list) or not predictions:
            raise RuntimeError("Classifier returned no predictions")
        top = predictions[0]
        return {
            "label": str(top["label"]),
            "confidence_percent": round(float(top["score"]) * 100),
        }

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
