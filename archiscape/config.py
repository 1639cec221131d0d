"""애플리케이션 설정"""
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class GeminiConfig(BaseModel):
    """GeminiService에 명시적으로 전달되는 설정"""
    api_key: str = ""
    base_url: Optional[str] = None
    generation_model: str = "gemini-2.5-flash-image"
    analysis_model: str = "gemini-2.5-flash"


class Settings(BaseSettings):
    """환경변수 기반 설정"""

    # API Keys (비어 있어도 됨, 호출 시점에 검사)
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_base_url", "api_base_url"),
    )

    # Application
    app_name: str = "ArchiScape Render API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # File Upload
    max_upload_size_mb: int = 10
    allowed_content_types: List[str] = ["image/jpeg", "image/png", "image/webp"]

    # Sessions (메모리 보관, 유휴 TTL + 최대 개수)
    max_sessions: int = 200
    session_ttl_seconds: int = 3600

    # Gemini API
    generation_model: str = "gemini-2.5-flash-image"
    analysis_model: str = "gemini-2.5-flash"

    # 교체된 이미지에 대한 응답 처리: "discard" 버림, "apply" 마지막 응답 적용
    stale_response_policy: Literal["discard", "apply"] = "discard"

    # Logging (log_dir 비우면 파일 로그 끔)
    log_level: str = "INFO"
    log_dir: str = "logs"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def gemini_config(self) -> GeminiConfig:
        base_url = (self.gemini_base_url or "").strip() or None
        return GeminiConfig(
            api_key=self.gemini_api_key,
            base_url=base_url,
            generation_model=self.generation_model,
            analysis_model=self.analysis_model,
        )


# 전역 설정 인스턴스
settings = Settings()
