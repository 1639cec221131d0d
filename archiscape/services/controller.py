"""세션 컨트롤러

``RenderController``가 ``SessionState`` 하나를 소유하고, 상태 변경은 전부 여기서만 한다.
분석과 생성은 동시에 실행되지 않으며 busy 플래그로 막는다.

업로드마다 ``image_token``이 증가하고, 외부 호출은 시작 시점의 토큰을 기억한다.
"discard" 정책이면 교체된 이미지에 대한 응답은 버리고,
"apply" 정책이면 그대로 저장한다 (마지막 응답 우선).
"""
import time
import uuid
from collections import OrderedDict
from typing import Callable, Literal, Optional, Tuple

from ..models.schemas import (
    ActiveTab,
    GenerationSettings,
    SessionState,
)
from ..utils.logger import get_logger
from .exceptions import ConfigurationError
from .gemini_service import GeminiService

logger = get_logger("controller")

ANALYSIS_FALLBACK_MESSAGE = "Smart analysis failed, switched to manual mode."
GENERATION_FALLBACK_MESSAGE = "Generation failed, please try again."

StalePolicy = Literal["discard", "apply"]


class RenderController:
    def __init__(self, service: GeminiService, stale_policy: StalePolicy = "discard"):
        self.service = service
        self.stale_policy = stale_policy
        self.state = SessionState()
        self.image_token = 0
        # 분석을 마지막으로 시작한 업로드의 토큰
        self._analyzed_token: Optional[int] = None

    def _is_stale(self, token: int) -> bool:
        return self.stale_policy == "discard" and token != self.image_token

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def upload_original(self, image: Optional[str]) -> None:
        """원본 이미지 교체 (빈 값이면 세션 이미지 초기화)"""
        self.image_token += 1
        self.state.generated_image = None
        self.state.analysis_result = None
        self.state.error = None

        if not image:
            logger.info("Original image cleared")
            self.state.original_image = None
            return

        self.state.original_image = image
        self.state.active_tab = ActiveTab.AI
        logger.info(f"Original image uploaded (token={self.image_token})")

    def upload_reference(self, image: Optional[str]) -> None:
        self.state.reference_image = image or None

    @property
    def needs_analysis(self) -> bool:
        return bool(
            self.state.original_image
            and self.state.analysis_result is None
            and not self.state.is_analyzing
            and self._analyzed_token != self.image_token
        )

    async def run_auto_analysis(self) -> None:
        """현재 원본 이미지 분석 (업로드당 최대 1회)"""
        while self.needs_analysis and not self.state.is_generating:
            token = self.image_token
            self._analyzed_token = token
            self.state.is_analyzing = True
            try:
                result = await self.service.analyze_architecture(self.state.original_image)
            except ConfigurationError as e:
                self.state.is_analyzing = False
                if self._is_stale(token):
                    continue
                logger.error(f"Analysis blocked: {e}")
                self.state.error = str(e)
                return
            except Exception as e:
                self.state.is_analyzing = False
                if self._is_stale(token):
                    continue
                logger.warning(f"Analysis failed, falling back to manual mode: {e}", exc_info=True)
                self.state.error = ANALYSIS_FALLBACK_MESSAGE
                return

            self.state.is_analyzing = False
            if self._is_stale(token):
                logger.info(f"Discarding analysis for replaced image (token={token})")
                continue

            self.state.analysis_result = result
            if result.proposals:
                self.state.settings = result.proposals[0].settings
            return

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def change_settings(self, settings: GenerationSettings) -> None:
        self.state.settings = settings

    def select_proposal(self, proposal_id: str) -> GenerationSettings:
        """제안 설정 적용 (없는 id면 KeyError)"""
        result = self.state.analysis_result
        proposals = result.proposals if result else []
        for proposal in proposals:
            if proposal.id == proposal_id:
                self.change_settings(proposal.settings)
                return proposal.settings
        raise KeyError(proposal_id)

    @property
    def selected_proposal_id(self) -> Optional[str]:
        """현재 설정과 필드 단위로 같은 제안의 id"""
        result = self.state.analysis_result
        if result is None:
            return None
        for proposal in result.proposals:
            if proposal.settings == self.state.settings:
                return proposal.id
        return None

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    @property
    def can_generate(self) -> bool:
        """원본 이미지가 있고, 실행 중이거나 예약된 분석이 없을 때"""
        return (
            bool(self.state.original_image)
            and not self.state.is_busy
            and not self.needs_analysis
        )

    async def generate(self) -> None:
        if not self.state.original_image or self.state.is_busy:
            return

        token = self.image_token
        self.state.is_generating = True
        self.state.error = None
        try:
            image = await self.service.generate_rendering(
                self.state.original_image,
                self.state.settings,
                self.state.reference_image,
            )
        except Exception as e:
            self.state.is_generating = False
            if self._is_stale(token):
                return
            logger.error(f"Generation failed: {e}")
            self.state.error = str(e) or GENERATION_FALLBACK_MESSAGE
            return

        self.state.is_generating = False
        if self._is_stale(token):
            logger.info(f"Discarding rendering for replaced image (token={token})")
            return
        self.state.generated_image = image

    # ------------------------------------------------------------------
    # UI facets
    # ------------------------------------------------------------------

    def dismiss_error(self) -> None:
        self.state.error = None

    def switch_tab(self, tab: ActiveTab) -> None:
        self.state.active_tab = tab


class SessionStore:
    """세션 id별 컨트롤러 (메모리 보관)

    유휴 시간이 ``ttl_seconds``를 넘은 세션과, ``max_sessions``를 넘는
    가장 오래 사용되지 않은 세션은 접근 시점에 제거된다.
    """

    def __init__(
        self,
        service: GeminiService,
        stale_policy: StalePolicy = "discard",
        max_sessions: int = 200,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.service = service
        self.stale_policy = stale_policy
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # session_id -> (controller, 마지막 접근 시각), 오래된 순
        self._sessions: "OrderedDict[str, Tuple[RenderController, float]]" = OrderedDict()

    def _evict(self, now: float) -> None:
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if len(self._sessions) <= self.max_sessions and now - last_seen <= self.ttl_seconds:
                break
            del self._sessions[session_id]
            logger.info(f"Session evicted: {session_id}")

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, RenderController]:
        """(session_id, controller) 반환, 없거나 만료된 세션이면 새로 생성"""
        now = self._clock()
        self._evict(now)

        if session_id and session_id in self._sessions:
            controller, _ = self._sessions.pop(session_id)
            self._sessions[session_id] = (controller, now)
            return session_id, controller

        session_id = uuid.uuid4().hex
        controller = RenderController(self.service, self.stale_policy)
        self._sessions[session_id] = (controller, now)
        self._evict(now)
        logger.info(f"Session created: {session_id} (active={len(self._sessions)})")
        return session_id, controller

    def controllers(self):
        """보관 중인 컨트롤러 (오래된 순)"""
        return [controller for controller, _ in self._sessions.values()]

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
