from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


CLASSIFY_PROMPT = (
    "Identify the car in this image. Reply with a single JSON object and nothing else, "
    "using these keys: make, model, generation, year_start, year_end, year_range, "
    "horsepower, torque_nm, weight_kg, zero_to_hundred (seconds), top_speed_kmh, "
    "production_numbers, drivetrain (FWD/RWD/AWD/4WD), vehicle_category, engine, "
    "engine_aspiration, country, region, prestige_class, confidence (0-1), "
    "real_world_confidence (0-1, is this a real car rather than a toy or render), "
    "frame_suspicion (0-1, is the image a screen or print photo). "
    "Use null for anything you are unsure about."
)

DEMO_CAR: dict[str, Any] = {
    "name": "Pagani Zonda C12 S",
    "manufacturer": "Pagani Automobili",
    "year": 2002,
    "type": "Coupe",
    "horsepower": 555,
    "engine": "7.3L V12",
    "country": "Italy",
    "confidence": 0.98,
}

_TEXT_KEYS = ("output_text", "output", "text", "content")


@dataclass
class OracleResult:
    text: str | None = None
    source: str = "none"
    error: str | None = None


def extract_text(payload: Any) -> str:
    """Pick the model's reply out of a decoded response body."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        for key in _TEXT_KEYS:
            value = payload.get(key)
            if isinstance(value, str):
                return value
        choices = payload.get("choices")
        if isinstance(choices, list) and choices:
            message = (choices[0] or {}).get("message") or {}
            if isinstance(message.get("content"), str):
                return message["content"]
    return json.dumps(payload)


class ClassificationOracle:
    """Async client for the image-classification model.

    Without a base URL the client answers every request with ``DEMO_CAR`` so
    the pipeline can run locally.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "",
        model: str = "gpt-4o-mini",
        timeout_seconds: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._enabled = bool(self.base_url)

    async def classify(self, image: str) -> OracleResult:
        if not self._enabled:
            return OracleResult(text=json.dumps(DEMO_CAR), source="demo")

        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        body = {"model": self.model, "prompt": CLASSIFY_PROMPT, "image": image}

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                resp = await client.post(f"{self.base_url}/classify", json=body, headers=headers)
                resp.raise_for_status()
            try:
                text = extract_text(resp.json())
            except ValueError:
                text = resp.text
            return OracleResult(text=text, source="oracle")
        except Exception as exc:
            logger.warning("Classification oracle call failed: %s", exc)
            return OracleResult(error=str(exc) or exc.__class__.__name__, source="oracle")
