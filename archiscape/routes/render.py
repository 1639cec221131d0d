from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Request, Response, UploadFile
from typing import Optional

from ..config import settings
from ..models.schemas import (
    GenerationSettings,
    SessionResponse,
    TabRequest,
    VocabularyOption,
    VocabularyResponse,
)
from ..models.vocabulary import CHOICE_GROUPS, choices
from ..services.controller import RenderController, SessionStore
from ..services.gemini_service import get_gemini_service
from ..utils.images import decode_image, download_filename, sniff_mime_type, to_data_url
from ..utils.logger import get_logger

logger = get_logger("routes")

router = APIRouter(prefix="/api", tags=["render"])

SESSION_COOKIE = "archiscape_session"

_session_store = None


def get_session_store() -> SessionStore:
    """SessionStore 인스턴스 가져오기"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(
            get_gemini_service(),
            settings.stale_response_policy,
            max_sessions=settings.max_sessions,
            ttl_seconds=settings.session_ttl_seconds,
        )
    return _session_store


def get_controller(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> RenderController:
    """쿠키로 식별한 세션의 컨트롤러"""
    session_id, controller = store.get_or_create(request.cookies.get(SESSION_COOKIE))
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return controller


def _snapshot(controller: RenderController) -> SessionResponse:
    return SessionResponse(
        state=controller.state,
        selected_proposal_id=controller.selected_proposal_id,
        analysis_pending=controller.needs_analysis,
        can_generate=controller.can_generate,
    )


async def _read_image(file: UploadFile) -> Optional[str]:
    """업로드 이미지 검증 후 data URL로 반환 (비어 있으면 None)"""
    max_size = settings.max_upload_size_mb * 1024 * 1024
    content = bytearray()
    chunk_size = 1024 * 1024  # 1MB 청크

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        content.extend(chunk)
        if len(content) > max_size:
            logger.warning(f"File too large: {len(content)} bytes")
            raise HTTPException(
                status_code=413,
                detail=f"File is too large. Maximum size is {settings.max_upload_size_mb}MB."
            )

    if not content:
        return None

    mime_type = sniff_mime_type(bytes(content))
    if mime_type not in settings.allowed_content_types:
        logger.warning(f"Rejected upload {file.filename}: {mime_type}")
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported image type. Allowed: {', '.join(settings.allowed_content_types)}"
        )

    logger.info(f"Image received: {file.filename} ({len(content)} bytes, {mime_type})")
    return to_data_url(bytes(content), mime_type)


@router.get("/vocabulary", response_model=VocabularyResponse)
async def get_vocabulary():
    """설정 필드별 옵션 목록"""
    return VocabularyResponse(
        groups={
            field: [VocabularyOption(**option) for option in choices(enum_cls)]
            for field, enum_cls in CHOICE_GROUPS.items()
        }
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(controller: RenderController = Depends(get_controller)):
    return _snapshot(controller)


@router.post("/session/original", response_model=SessionResponse)
async def upload_original(
    background_tasks: BackgroundTasks,
    file: Optional[UploadFile] = File(None),
    controller: RenderController = Depends(get_controller),
):
    """건축 이미지 업로드 (분석은 백그라운드에서 시작)

    빈 업로드는 세션 이미지를 초기화한다.
    """
    image = await _read_image(file) if file is not None else None
    controller.upload_original(image)
    if image:
        background_tasks.add_task(controller.run_auto_analysis)
    return _snapshot(controller)


@router.delete("/session/original", response_model=SessionResponse)
async def clear_original(controller: RenderController = Depends(get_controller)):
    controller.upload_original(None)
    return _snapshot(controller)


@router.post("/session/reference", response_model=SessionResponse)
async def upload_reference(
    file: UploadFile = File(...),
    controller: RenderController = Depends(get_controller),
):
    """스타일 참고 이미지 업로드 (선택)"""
    controller.upload_reference(await _read_image(file))
    return _snapshot(controller)


@router.delete("/session/reference", response_model=SessionResponse)
async def clear_reference(controller: RenderController = Depends(get_controller)):
    controller.upload_reference(None)
    return _snapshot(controller)


@router.put("/session/settings", response_model=SessionResponse)
async def change_settings(
    new_settings: GenerationSettings,
    controller: RenderController = Depends(get_controller),
):
    controller.change_settings(new_settings)
    return _snapshot(controller)


@router.post("/session/proposals/{proposal_id}/select", response_model=SessionResponse)
async def select_proposal(proposal_id: str, controller: RenderController = Depends(get_controller)):
    try:
        controller.select_proposal(proposal_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Proposal not found: {proposal_id}")
    return _snapshot(controller)


@router.post("/session/generate", response_model=SessionResponse)
async def generate(
    background_tasks: BackgroundTasks,
    controller: RenderController = Depends(get_controller),
):
    """현재 이미지를 현재 설정으로 렌더링

    원본 이미지가 없으면 아무 것도 하지 않는다. 실패는 ``state.error``에 기록.
    """
    if controller.state.is_busy or controller.needs_analysis:
        raise HTTPException(status_code=409, detail="A request is already in progress.")

    await controller.generate()
    # 생성 중 업로드된 이미지의 분석은 여기서 시작
    background_tasks.add_task(controller.run_auto_analysis)
    return _snapshot(controller)


@router.delete("/session/error", response_model=SessionResponse)
async def dismiss_error(controller: RenderController = Depends(get_controller)):
    controller.dismiss_error()
    return _snapshot(controller)


@router.put("/session/tab", response_model=SessionResponse)
async def switch_tab(request: TabRequest, controller: RenderController = Depends(get_controller)):
    controller.switch_tab(request.tab)
    return _snapshot(controller)


@router.get("/session/download")
async def download_rendering(controller: RenderController = Depends(get_controller)):
    """렌더링 결과를 PNG 첨부파일로 반환"""
    if not controller.state.generated_image:
        raise HTTPException(status_code=404, detail="No rendering available yet.")

    raw, _ = decode_image(controller.state.generated_image)
    filename = download_filename()
    return Response(
        content=raw,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
