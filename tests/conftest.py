"""
Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import asyncio
import json
import pytest
from io import BytesIO
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

from PIL import Image

from archiscape.config import GeminiConfig
from archiscape.models.schemas import AnalysisResult, GenerationSettings, Proposal
from archiscape.models.vocabulary import InteriorStyle, LandscapeStyle, Season, SceneType, TimeOfDay
from archiscape.utils.images import to_data_url


def _image_bytes(fmt: str, color: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes("PNG", "white")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG", "gray")


@pytest.fixture
def png_data_url(png_bytes) -> str:
    return to_data_url(png_bytes, "image/png")


@pytest.fixture
def jpeg_data_url(jpeg_bytes) -> str:
    return to_data_url(jpeg_bytes, "image/jpeg")


@pytest.fixture
def gemini_config() -> GeminiConfig:
    return GeminiConfig(api_key="test-key")


@pytest.fixture
def fake_client() -> MagicMock:
    """Stand-in for google.genai.Client"""
    return MagicMock()


def make_image_response(data: Optional[bytes]) -> SimpleNamespace:
    """Minimal generate_content response with an optional inline image"""
    parts = [SimpleNamespace(inline_data=None, text="Here is your rendering.")]
    if data is not None:
        parts.append(SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png")))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


@pytest.fixture
def analysis_payload() -> Dict[str, Any]:
    """Valid structured analysis output"""
    return {
        "architectural_style": "Contemporary Minimalism",
        "confidence": "Flat roof, large glazing and clean white volumes.",
        "proposals": [
            {
                "id": "p1",
                "title": "Calm Courtyard",
                "rationale": "Sparse planting keeps the volumes readable.",
                "description": "A minimalist garden at noon.",
                "settings": {
                    "style": "modern_minimalist",
                    "time": "sunny_noon",
                    "season": "summer",
                    "prompt_enhancement": "",
                },
            },
            {
                "id": "p2",
                "title": "Golden Retreat",
                "rationale": "Warm light softens the concrete.",
                "description": "Tropical planting at sunset.",
                "settings": {
                    "style": "tropical_resort",
                    "time": "golden_hour",
                    "season": "autumn",
                    "prompt_enhancement": "a reflecting pool",
                },
            },
            {
                "id": "p3",
                "title": "Winter Silence",
                "rationale": "Snow emphasises the rectilinear massing.",
                "description": "A zen garden under snow at twilight.",
                "settings": {
                    "style": "japanese_zen",
                    "time": "blue_hour",
                    "season": "winter",
                    "prompt_enhancement": "warm interior lights",
                },
            },
        ],
    }


@pytest.fixture
def analysis_json(analysis_payload) -> str:
    return json.dumps(analysis_payload)


@pytest.fixture
def analysis_result() -> AnalysisResult:
    def proposal(pid, style, time, season):
        return Proposal(
            id=pid,
            title=f"Proposal {pid}",
            rationale="Fits the massing.",
            description="A scene.",
            settings=GenerationSettings(
                scene_type=SceneType.EXTERIOR,
                style=style,
                interior_style=InteriorStyle.CREAM,
                time=time,
                season=season,
            ),
        )

    return AnalysisResult(
        architectural_style="Brutalism",
        confidence="Exposed concrete and heavy massing.",
        proposals=[
            proposal("p1", LandscapeStyle.FOREST, TimeOfDay.FOGGY_MORNING, Season.AUTUMN),
            proposal("p2", LandscapeStyle.DESERT, TimeOfDay.SUNNY_NOON, Season.SUMMER),
            proposal("p3", LandscapeStyle.ZEN, TimeOfDay.NIGHT, Season.WINTER),
        ],
    )


class FakeGeminiService:
    """In-memory GeminiService replacement that records calls.

    Set ``analysis_error`` / ``generation_error`` to make a call fail, or
    ``analysis_gate`` / ``generation_gate`` (asyncio.Event) to hold a call
    open until the test releases it.
    """

    def __init__(self, analysis_result: Optional[AnalysisResult] = None, rendered: str = ""):
        self.analysis_result = analysis_result
        self.rendered = rendered
        self.analysis_error: Optional[Exception] = None
        self.generation_error: Optional[Exception] = None
        self.analysis_gate: Optional[asyncio.Event] = None
        self.generation_gate: Optional[asyncio.Event] = None
        self.analyze_calls: List[str] = []
        self.generate_calls: List[tuple] = []

    async def analyze_architecture(self, image: str) -> AnalysisResult:
        self.analyze_calls.append(image)
        if self.analysis_gate is not None:
            await self.analysis_gate.wait()
        if self.analysis_error is not None:
            raise self.analysis_error
        return self.analysis_result

    async def generate_rendering(self, image, generation_settings, reference_image=None) -> str:
        self.generate_calls.append((image, generation_settings, reference_image))
        if self.generation_gate is not None:
            await self.generation_gate.wait()
        if self.generation_error is not None:
            raise self.generation_error
        return self.rendered


@pytest.fixture
def fake_service(analysis_result) -> FakeGeminiService:
    return FakeGeminiService(analysis_result=analysis_result, rendered="data:image/png;base64,QUJD")
