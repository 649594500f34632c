"""Google Gemini client for macro estimation and workout generation.

Both operations return an `AIResult` instead of raising: network errors,
non-200 responses, empty or malformed payloads and a missing API key all
become ``AIResult(ok=False, reason=...)``. Callers decide the fallback, using
`nutrition_fallback` / `workout_fallback` for the standard zero values.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from core import config
from core.exceptions import AIServiceError, AppException, ConfigurationError
from core.logger import get_logger
from schemas.ai_schema import GeneratedExercise, GeneratedWorkout, NutritionEstimate, WorkoutPlan
from schemas.tracking_schema import CardioExercise, Macros, StrengthExercise

logger = get_logger("services.ai_client")

T = TypeVar("T")

NUTRITION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING", "description": "A short, clean name for the food item"},
        "macros": {
            "type": "OBJECT",
            "properties": {
                field: {"type": "NUMBER"}
                for field in ("calories", "protein", "carbs", "fat", "fiber", "potassium", "sodium")
            },
            "required": ["calories", "protein", "carbs", "fat", "fiber", "potassium", "sodium"],
        },
    },
    "required": ["name", "macros"],
}

WORKOUT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING", "description": "Name of the workout session"},
        "exercises": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "sets": {"type": "NUMBER", "description": "For strength exercises"},
                    "reps": {"type": "STRING", "description": "For strength exercises"},
                    "weight": {"type": "NUMBER", "description": "Estimated weight in kg"},
                    "duration": {"type": "NUMBER", "description": "For cardio: duration in minutes"},
                    "distance": {"type": "NUMBER", "description": "For cardio: distance in km"},
                    "intensity": {"type": "STRING", "description": "For cardio: speed, incline or zone"},
                    "notes": {"type": "STRING"},
                },
                "required": ["name"],
            },
        },
    },
    "required": ["name", "exercises"],
}

STRENGTH_INSTRUCTION = "Focus on sets, reps, and weight."
CARDIO_INSTRUCTION = (
    "Focus on duration (minutes), distance (km), and intensity "
    "(e.g., 'Pace 5:00', 'Zone 2', 'Incline 12')."
)


@dataclass
class AIResult(Generic[T]):
    """Outcome of an AI call: `data` when ok, otherwise a failure `reason`."""

    ok: bool
    data: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, data: T) -> "AIResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, reason: str) -> "AIResult[T]":
        return cls(ok=False, reason=reason)

    def unwrap_or(self, fallback: T) -> T:
        return self.data if self.ok else fallback


def nutrition_fallback(text: str) -> NutritionEstimate:
    """Zero macros named after what the user typed."""
    return NutritionEstimate(name=text, macros=Macros())


def workout_fallback(workout_type: str) -> WorkoutPlan:
    return WorkoutPlan(
        name="Custom Workout" if workout_type == "strength" else "Custom Cardio",
        exercises=[],
    )


def to_typed_exercise(generated: GeneratedExercise, workout_type: str):
    """Give a generated exercise a fresh id and the requested variant."""
    fields = generated.model_dump(exclude_none=True)
    if workout_type == "cardio":
        allowed = {"name", "distance", "duration", "intensity", "notes"}
        return CardioExercise(**{k: v for k, v in fields.items() if k in allowed})
    allowed = {"name", "sets", "reps", "weight", "notes"}
    return StrengthExercise(**{k: v for k, v in fields.items() if k in allowed})


class GeminiClient:
    """Minimal async client for the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_seconds: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or config.GEMINI_MODEL
        self.base_url = (base_url or config.GEMINI_BASE_URL).rstrip("/")
        self.timeout = config.AI_TIMEOUT_SECONDS if timeout is None else timeout
        self.max_retries = max(0, config.AI_MAX_RETRIES if max_retries is None else max_retries)
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    @staticmethod
    def _extract_text(data) -> str:
        """Concatenate the text parts of the first candidate; odd shapes yield ""."""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts") or []
        if not isinstance(parts, list):
            return ""
        texts = []
        for part in parts:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                texts.append(part["text"])
        return "".join(texts)

    async def _post(self, payload: dict) -> httpx.Response:
        """POST with bounded retries on transport errors and 5xx responses."""
        last_error = None
        for attempt in range(self.max_retries + 1):
            if attempt:
                await asyncio.sleep(self.backoff_seconds * attempt)
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    resp = await client.post(
                        self._endpoint(),
                        headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
                        json=payload,
                    )
            except httpx.TransportError as exc:
                last_error = AIServiceError(f"Gemini request failed: {exc}", reason="network_error")
                logger.warning("Gemini attempt %d failed: %s", attempt + 1, exc)
                continue
            if resp.status_code >= 500:
                last_error = AIServiceError(f"Gemini server error {resp.status_code}", reason=f"http_{resp.status_code}")
                logger.warning("Gemini attempt %d returned %s", attempt + 1, resp.status_code)
                continue
            if resp.status_code != 200:
                raise AIServiceError(f"Gemini API error {resp.status_code}: {resp.text}", reason=f"http_{resp.status_code}")
            return resp
        raise last_error

    async def _generate_json(self, prompt: str, schema: dict) -> dict:
        if not self.is_configured:
            raise ConfigurationError("GEMINI_API_KEY is not set", config_key="GEMINI_API_KEY")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        resp = await self._post(payload)
        try:
            body = resp.json()
        except ValueError as exc:
            raise AIServiceError(f"AI returned a non-JSON body: {exc}", reason="malformed_response") from exc
        text = self._extract_text(body)
        if not text:
            raise AIServiceError("No response from AI", reason="empty_response")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AIServiceError(f"AI returned invalid JSON: {exc}", reason="malformed_response") from exc

    async def estimate_nutrition(self, food_description: str) -> AIResult[NutritionEstimate]:
        """Estimate the name and macros of a free-text food description."""
        prompt = (
            f'Analyze the nutritional value of this food: "{food_description}". '
            "Estimate values if exact data is unavailable. Return JSON."
        )
        try:
            raw = await self._generate_json(prompt, NUTRITION_SCHEMA)
            return AIResult.success(NutritionEstimate.model_validate(raw))
        except AppException as exc:
            logger.warning("Nutrition estimate failed: %s", exc.message)
            return AIResult.failure(exc.details.get("reason") or exc.message)
        except PydanticValidationError as exc:
            logger.warning("Nutrition estimate had unexpected shape: %s", exc)
            return AIResult.failure("malformed_response")

    async def generate_workout_plan(self, request: str, workout_type: str) -> AIResult[WorkoutPlan]:
        """Generate a named list of exercises of the given type."""
        instruction = CARDIO_INSTRUCTION if workout_type == "cardio" else STRENGTH_INSTRUCTION
        prompt = (
            f'Create a {workout_type} workout routine based on this request: "{request}". '
            f"{instruction} Return JSON."
        )
        try:
            raw = await self._generate_json(prompt, WORKOUT_SCHEMA)
            generated = GeneratedWorkout.model_validate(raw)
            plan = WorkoutPlan(
                name=generated.name,
                exercises=[to_typed_exercise(e, workout_type) for e in generated.exercises],
            )
            return AIResult.success(plan)
        except AppException as exc:
            logger.warning("Workout generation failed: %s", exc.message)
            return AIResult.failure(exc.details.get("reason") or exc.message)
        except PydanticValidationError as exc:
            logger.warning("Workout plan had unexpected shape: %s", exc)
            return AIResult.failure("malformed_response")


ai_client = GeminiClient()


def get_ai_client() -> GeminiClient:
    """FastAPI dependency returning the shared client (overridable in tests)."""
    return ai_client
