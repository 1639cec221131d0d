import asyncio
import base64
import re
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from ..config import GeminiConfig, settings
from ..models.schemas import (
    DEFAULT_SETTINGS,
    AnalysisPayload,
    AnalysisResult,
    GenerationSettings,
    Proposal,
)
from ..models.vocabulary import SceneType
from ..utils.images import decode_image, to_data_url
from ..utils.logger import get_logger
from .exceptions import (
    AnalysisParseError,
    ConfigurationError,
    NoImageProduced,
    UpstreamError,
)
from .prompt_builder import build_analysis_prompt, build_generation_prompt

logger = get_logger("gemini")

PROPOSAL_COUNT = 3

MISSING_KEY_MESSAGE = (
    "API key is not configured. Set GEMINI_API_KEY (or API_KEY) in the "
    "deployment environment."
)


def _parse_json_text(raw_text: str) -> str:
    """JSON 응답의 마크다운 코드 블록 제거"""
    text = raw_text.strip()
    text = re.sub(r"^```(?:json)?\s*\n?", "", text)
    text = re.sub(r"\n?```\s*$", "", text)
    return text


def _extract_image_bytes(response: Any) -> Optional[bytes]:
    """응답의 첫 번째 inline 이미지 (없으면 None)"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data and inline_data.data:
            data = inline_data.data
            if isinstance(data, str):
                return base64.b64decode(data)
            return data
    return None


class GeminiService:
    """Google Gemini API 서비스

    렌더링(이미지 -> 이미지)과 건축 분석(이미지 -> 구조화 JSON) 두 호출을 담당.
    API 키는 매 호출마다, 요청 전에 검사한다.
    """

    def __init__(self, config: GeminiConfig, client: Optional[genai.Client] = None):
        self.config = config
        self._client = client
        logger.info(
            "GeminiService initialized "
            f"(generation={config.generation_model}, analysis={config.analysis_model}, "
            f"base_url={config.base_url or 'default'})"
        )

    def _get_client(self) -> genai.Client:
        api_key = (self.config.api_key or "").strip()
        if not api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        if self._client is None:
            http_options = None
            if self.config.base_url:
                http_options = types.HttpOptions(base_url=self.config.base_url)
            self._client = genai.Client(api_key=api_key, http_options=http_options)
        return self._client

    @staticmethod
    def _image_part(image: str) -> types.Part:
        raw, mime_type = decode_image(image)
        return types.Part.from_bytes(data=raw, mime_type=mime_type)

    async def generate_rendering(
        self,
        image: str,
        generation_settings: GenerationSettings,
        reference_image: Optional[str] = None
    ) -> str:
        """건축 이미지를 장면 설정에 맞춰 포토리얼 렌더링

        Args:
            image: 원본 이미지 (data URL 또는 base64)
            generation_settings: 장면 파라미터
            reference_image: 스타일 참고 이미지 (선택, 두 번째로 전송)

        Returns:
            str: ``data:image/png;base64,...`` 형식의 결과 이미지
        """
        has_reference = bool(reference_image)
        prompt = build_generation_prompt(generation_settings, has_reference=has_reference)

        try:
            client = self._get_client()
            contents = [prompt, self._image_part(image)]
            if has_reference:
                contents.append(self._image_part(reference_image))

            logger.info(
                f"Generating {generation_settings.scene_type.value} rendering "
                f"with {self.config.generation_model} (reference={has_reference})"
            )
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.config.generation_model,
                contents=contents,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Rendering request failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise UpstreamError(str(e) or "Failed to generate rendering.") from e

        image_data = _extract_image_bytes(response)
        if not image_data:
            logger.warning("Rendering response contained no image data")
            raise NoImageProduced()

        logger.info(f"Rendering completed ({len(image_data)} bytes)")
        return to_data_url(image_data, "image/png")

    async def analyze_architecture(self, image: str) -> AnalysisResult:
        """건축 스타일 분석 + 외부 장면 프리셋 3개 제안 (JSON mode)"""
        try:
            client = self._get_client()
            logger.info(f"Analyzing architecture with {self.config.analysis_model}")
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.config.analysis_model,
                contents=[build_analysis_prompt(), self._image_part(image)],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=AnalysisPayload,
                ),
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Analysis request failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise UpstreamError(str(e) or "Failed to analyze architecture.") from e

        response_text = getattr(response, "text", None)
        if not isinstance(response_text, str) or not response_text.strip():
            raise AnalysisParseError("Analysis response contained no structured payload.")

        try:
            payload = AnalysisPayload.model_validate_json(_parse_json_text(response_text))
        except ValidationError as e:
            logger.warning(f"Malformed analysis payload: {e}")
            raise AnalysisParseError(
                "Analysis response did not match the expected schema.",
                details={"errors": e.error_count()},
            ) from e

        if len(payload.proposals) != PROPOSAL_COUNT:
            raise AnalysisParseError(
                f"Expected {PROPOSAL_COUNT} proposals, got {len(payload.proposals)}."
            )

        result = AnalysisResult(
            architectural_style=payload.architectural_style,
            confidence=payload.confidence,
            proposals=[
                Proposal(
                    id=p.id,
                    title=p.title,
                    rationale=p.rationale,
                    description=p.description,
                    # 분석 스키마는 외부 장면 필드만 포함
                    settings=GenerationSettings(
                        scene_type=SceneType.EXTERIOR,
                        style=p.settings.style,
                        interior_style=DEFAULT_SETTINGS.interior_style,
                        time=p.settings.time,
                        season=p.settings.season,
                        prompt_enhancement=p.settings.prompt_enhancement,
                    ),
                )
                for p in payload.proposals
            ],
        )
        logger.info(f"Analysis completed: {result.architectural_style}")
        return result


# 싱글톤 인스턴스
_gemini_service = None

def get_gemini_service() -> GeminiService:
    """GeminiService 인스턴스 가져오기"""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService(settings.gemini_config())
    return _gemini_service
