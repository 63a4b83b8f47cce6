# backend/lumina/services/insights.py

import json
import logging
from typing import Iterable, List, Optional

import httpx

from lumina.core.config import Settings
from lumina.core.errors import ExternalServiceFailure
from lumina.models.product import Product

logger = logging.getLogger(__name__)

DESCRIPTION_FALLBACK = "Description generation unavailable."
INSIGHTS_FALLBACK = "<ul><li>Unable to analyze inventory at this time.</li></ul>"


def inventory_summary(products: Iterable[Product]) -> List[dict]:
    # trimmed down to keep the prompt small
    return [
        {
            "name": p.name,
            "stock": p.stock,
            "min_stock": p.min_stock,
            "profit_margin": round(p.margin, 2),
        }
        for p in products
    ]


def description_prompt(name: str, category: str) -> str:
    return (
        "Write a short, catchy, and professional product description (max 15 words) "
        f'for a product named "{name}" in the category "{category}".'
    )


def insights_prompt(products: Iterable[Product]) -> str:
    return (
        "Analyze this inventory data:\n"
        f"{json.dumps(inventory_summary(products))}\n\n"
        "Provide 3 brief, actionable insights focusing on restock needs and profit opportunities.\n"
        "Format as a simple HTML list (<ul><li>...</li></ul>) without markdown code blocks."
    )


class InsightsClient:
    """
    Thin async client for the Gemini generateContent endpoint.

    Public methods never raise: any failure is logged and replaced by a fixed
    fallback string.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.api_url = settings.gemini_api_url.rstrip("/")
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.timeout = settings.gemini_timeout
        self._client = client

    async def _generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ExternalServiceFailure("Gemini API key is not configured")

        url = f"{self.api_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key}

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            raise ExternalServiceFailure(f"Gemini request failed: {e}") from e

        text = (text or "").strip()
        if not text:
            raise ExternalServiceFailure("Gemini returned an empty response")
        return text

    async def generate_product_description(self, name: str, category: str) -> str:
        try:
            return await self._generate(description_prompt(name, category))
        except ExternalServiceFailure as e:
            logger.warning(f"Description generation failed: {e}")
            return DESCRIPTION_FALLBACK

    async def analyze_inventory_health(self, products: Iterable[Product]) -> str:
        try:
            return await self._generate(insights_prompt(products))
        except ExternalServiceFailure as e:
            logger.warning(f"Inventory analysis failed: {e}")
            return INSIGHTS_FALLBACK
