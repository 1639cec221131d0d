from fastapi import FastAPI, Request
from fastapi.templating import Jinja2Templates
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path

from .routes import render
from .config import settings
from .utils.logger import logger

# 프로젝트 루트 (templates/ 포함)
BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_DIR / "templates"

logger.info(f"Starting {settings.app_name} v{settings.app_version}")

# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    description="Photorealistic architectural rendering and style analysis API",
    version=settings.app_version,
    debug=settings.debug
)

# CORS 설정 (환경변수 기반)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"CORS enabled for origins: {settings.cors_origins}")

# 템플릿 설정
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# 라우터 등록
app.include_router(render.router)


@app.get("/")
async def home(request: Request):
    """홈페이지 (단일 페이지 UI)"""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"app_name": settings.app_name, "app_version": settings.app_version},
    )


@app.get("/health")
async def health_check():
    """헬스 체크 및 설정 요약"""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "gemini_api_key_configured": bool(settings.gemini_api_key.strip()),
        "config": {
            "max_upload_size_mb": settings.max_upload_size_mb,
            "generation_model": settings.generation_model,
            "analysis_model": settings.analysis_model,
            "custom_base_url": bool(settings.gemini_config().base_url),
            "stale_response_policy": settings.stale_response_policy,
            "max_sessions": settings.max_sessions,
            "session_ttl_seconds": settings.session_ttl_seconds,
        }
    }


@app.on_event("startup")
async def startup_event():
    """애플리케이션 시작 시 실행"""
    logger.info("="*50)
    logger.info("Application startup")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Gemini API configured: {bool(settings.gemini_api_key.strip())}")
    logger.info(f"Max upload size: {settings.max_upload_size_mb}MB")
    logger.info("="*50)


@app.on_event("shutdown")
async def shutdown_event():
    """애플리케이션 종료 시 실행"""
    logger.info("Application shutdown")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
