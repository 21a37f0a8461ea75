import asyncio
import json

import httpx

from camping.core.ai.service import (
    EMPTY_SOLUTION, FAILED_ANALYSIS, FAILED_SOLUTION, NO_KEY_ANALYSIS, NO_KEY_SOLUTION, AISuggestionService,
)
from camping.core.incidents.models import Category, Priority


def _gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _service(handler) -> AISuggestionService:
    return AISuggestionService(api_key="test-key", transport=httpx.MockTransport(handler))


def test_analyze_without_key_returns_default():
    result = asyncio.run(AISuggestionService(api_key="").analyze("el grifo pierde", "Piscina"))
    assert result == NO_KEY_ANALYSIS
    assert result.title_suggestion == "Nueva Incidencia"


def test_analyze_parses_structured_reply():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_reply(json.dumps({
            "priority": "Crítica",
            "category": "Bungalows",
            "titleSuggestion": "Cortocircuito en bungalow",
            "suggestedSteps": ["Cortar corriente", "Avisar electricista", "Revisar cuadro"],
        })))

    result = asyncio.run(_service(handler).analyze("huele a quemado", "Bungalow 42"))
    assert result.priority == Priority.CRITICA
    assert result.category == Category.BUNGALOWS
    assert result.title_suggestion == "Cortocircuito en bungalow"
    assert len(result.suggested_steps) == 3
    assert ":generateContent" in seen["url"]
    assert "key=test-key" in seen["url"]
    assert "Bungalow 42" in seen["body"]["contents"][0]["parts"][0]["text"]
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"


def test_analyze_maps_unknown_enum_values():
    def handler(request):
        return httpx.Response(200, json=_gemini_reply(json.dumps({
            "priority": "Urgentísima", "category": "Piscina", "titleSuggestion": "x", "suggestedSteps": [],
        })))

    result = asyncio.run(_service(handler).analyze("algo raro", "Piscina"))
    assert result.priority == Priority.MEDIA
    assert result.category == Category.PARCELAS


def test_analyze_falls_back_on_http_error():
    result = asyncio.run(_service(lambda r: httpx.Response(500)).analyze("algo", "Piscina"))
    assert result == FAILED_ANALYSIS


def test_analyze_falls_back_on_bad_json():
    result = asyncio.run(_service(lambda r: httpx.Response(200, json=_gemini_reply("no es json"))).analyze("algo", "x"))
    assert result == FAILED_ANALYSIS


def test_analyze_falls_back_on_transport_error():
    def handler(request):
        raise httpx.ConnectError("sin red", request=request)

    assert asyncio.run(_service(handler).analyze("algo", "x")) == FAILED_ANALYSIS


def test_suggest_solution():
    def handler(request):
        return httpx.Response(200, json=_gemini_reply("1. Cerrar llave de paso"))

    text = asyncio.run(_service(handler).suggest_solution("Grifo", "pierde agua", "Sanitarios"))
    assert text == "1. Cerrar llave de paso"


def test_suggest_solution_fallbacks():
    assert asyncio.run(AISuggestionService(api_key="").suggest_solution("t", "d", "c")) == NO_KEY_SOLUTION
    assert asyncio.run(_service(lambda r: httpx.Response(503)).suggest_solution("t", "d", "c")) == FAILED_SOLUTION
    assert asyncio.run(_service(lambda r: httpx.Response(200, json=_gemini_reply(""))).suggest_solution("t", "d", "c")) == EMPTY_SOLUTION
    assert asyncio.run(_service(lambda r: httpx.Response(200, json={})).suggest_solution("t", "d", "c")) == FAILED_SOLUTION


def test_null_parts_and_null_text_fall_back():
    null_parts = {"candidates": [{"content": {"parts": None}}]}
    null_text = {"candidates": [{"content": {"parts": [{"text": None}]}}]}

    for reply, analysis, solution in (
        (null_parts, FAILED_ANALYSIS, EMPTY_SOLUTION),
        (null_text, FAILED_ANALYSIS, EMPTY_SOLUTION),
        ({"candidates": [{"content": {"parts": "texto"}}]}, FAILED_ANALYSIS, FAILED_SOLUTION),
    ):
        service = _service(lambda r, reply=reply: httpx.Response(200, json=reply))
        assert asyncio.run(service.analyze("algo", "x")) == analysis
        assert asyncio.run(service.suggest_solution("t", "d", "c")) == solution
