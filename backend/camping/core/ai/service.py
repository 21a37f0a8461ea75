"""
Client for the hosted generative-AI endpoint (Gemini `generateContent`).

The service is advisory only. Every failure path ends in a fixed default
answer; nothing here raises to the caller.
"""
import json
import logging

import httpx

from camping.core.ai.schemas import AIAnalysisResult
from camping.core.incidents.models import Category, Priority
from camping.db.mapping import parse_enum

logger = logging.getLogger(__name__)

NO_KEY_ANALYSIS = AIAnalysisResult(
    priority=Priority.MEDIA,
    category=Category.PARCELAS,
    title_suggestion="Nueva Incidencia",
    suggested_steps=["Verificar in situ", "Contactar mantenimiento"],
)

FAILED_ANALYSIS = AIAnalysisResult(
    priority=Priority.MEDIA,
    category=Category.PARCELAS,
    title_suggestion="Revisión Manual",
    suggested_steps=["Acudir al lugar", "Evaluar daños"],
)

NO_KEY_SOLUTION = "Falta la API Key. No se puede generar solución."
FAILED_SOLUTION = "Error conectando con el servicio de IA."
EMPTY_SOLUTION = "No se pudo generar una solución."

ANALYSIS_PROMPT = """Actúa como un Jefe de Mantenimiento de un Camping Resort. Analiza la siguiente descripción de una incidencia.

Ubicación: "{location}"
Descripción: "{description}"

Determina:
1. Prioridad: Baja, Media, Alta, Crítica.
2. Categoría exacta (solo una): Parcelas, Bungalows, Glamping, Restaurant, Cocina, TTOO, Sanitarios.
3. Título corto y profesional.
4. 3 pasos inmediatos para el equipo de mantenimiento."""

SOLUTION_PROMPT = """Eres experto en mantenimiento de instalaciones turísticas y campings.
Proporciona un plan de acción técnico y conciso para resolver esta incidencia en la categoría: {category}.
Usa formato Markdown.

Título: {title}
Descripción: {description}"""

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "priority": {"type": "STRING", "enum": [p.value for p in Priority]},
        "category": {"type": "STRING", "enum": [c.value for c in Category]},
        "titleSuggestion": {"type": "STRING"},
        "suggestedSteps": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["priority", "category", "titleSuggestion", "suggestedSteps"],
}


class AIServiceError(Exception):
    pass


class AISuggestionService:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _generate(self, prompt: str, generation_config: dict | None = None) -> str:
        body: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            body["generationConfig"] = generation_config

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json=body,
            )
            response.raise_for_status()
            payload = response.json()

        try:
            parts = payload["candidates"][0]["content"]["parts"]
            return "".join(str(p.get("text") or "") for p in parts or [])
        except (KeyError, IndexError, TypeError, AttributeError):
            raise AIServiceError("Malformed response from AI service")

    async def analyze(self, description: str, location: str) -> AIAnalysisResult:
        if not self.configured:
            logger.warning("No API key configured for the AI service")
            return NO_KEY_ANALYSIS.model_copy(deep=True)

        try:
            text = await self._generate(
                ANALYSIS_PROMPT.format(location=location, description=description),
                {"responseMimeType": "application/json", "responseSchema": ANALYSIS_SCHEMA},
            )
            if not text:
                raise AIServiceError("No response from AI")
            result = json.loads(text)
            steps = result.get("suggestedSteps") or []
            return AIAnalysisResult(
                priority=parse_enum(Priority, result.get("priority"), Priority.MEDIA),
                category=parse_enum(Category, result.get("category"), Category.PARCELAS),
                title_suggestion=str(result.get("titleSuggestion") or FAILED_ANALYSIS.title_suggestion),
                suggested_steps=[str(s) for s in steps],
            )
        except (httpx.HTTPError, AIServiceError, ValueError, AttributeError) as e:
            logger.error("AI analysis failed: %s", e)
            return FAILED_ANALYSIS.model_copy(deep=True)

    async def suggest_solution(self, title: str, description: str, category: str) -> str:
        if not self.configured:
            return NO_KEY_SOLUTION

        try:
            text = await self._generate(
                SOLUTION_PROMPT.format(category=category, title=title, description=description),
            )
        except (httpx.HTTPError, AIServiceError, ValueError) as e:
            logger.error("AI solution failed: %s", e)
            return FAILED_SOLUTION
        return text or EMPTY_SOLUTION
