from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict

from .vocabulary import InteriorStyle, LandscapeStyle, Season, SceneType, TimeOfDay


class ActiveTab(str, Enum):
    AI = "ai"
    CUSTOM = "custom"


class GenerationSettings(BaseModel):
    """렌더링 1회의 장면 파라미터

    ``style``은 외부 장면, ``interior_style``은 실내 장면에만 적용.
    비활성 필드도 유지하므로 장면을 되돌리면 값이 복원된다.
    동등 비교는 필드 단위.
    """
    model_config = ConfigDict(frozen=True)

    scene_type: SceneType = SceneType.EXTERIOR
    style: LandscapeStyle = LandscapeStyle.MODERN
    interior_style: InteriorStyle = InteriorStyle.CREAM
    time: TimeOfDay = TimeOfDay.SUNNY_NOON
    season: Season = Season.SUMMER
    prompt_enhancement: str = ""


DEFAULT_SETTINGS = GenerationSettings()


class Proposal(BaseModel):
    """분석 결과로 제안된 프리셋"""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    rationale: str
    description: str
    settings: GenerationSettings


class AnalysisResult(BaseModel):
    """건축 분석 결과"""
    model_config = ConfigDict(frozen=True)

    architectural_style: str
    confidence: str
    proposals: List[Proposal]


class SessionState(BaseModel):
    """세션 하나의 화면 상태"""
    original_image: Optional[str] = None
    reference_image: Optional[str] = None
    generated_image: Optional[str] = None
    is_analyzing: bool = False
    is_generating: bool = False
    analysis_result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    settings: GenerationSettings = DEFAULT_SETTINGS
    active_tab: ActiveTab = ActiveTab.AI

    @property
    def is_busy(self) -> bool:
        return self.is_analyzing or self.is_generating


# ---------------------------------------------------------------------------
# 분석 호출용 구조화 출력 스키마
# (외부 장면 필드만, 이후 GenerationSettings로 보완)
# ---------------------------------------------------------------------------

# 기본값 금지: Gemini response schema는 "default"를 거부함
class ProposalSettingsPayload(BaseModel):
    style: LandscapeStyle
    time: TimeOfDay
    season: Season
    prompt_enhancement: str


class ProposalPayload(BaseModel):
    id: str
    title: str
    rationale: str
    description: str
    settings: ProposalSettingsPayload


class AnalysisPayload(BaseModel):
    architectural_style: str
    confidence: str
    proposals: List[ProposalPayload]


# ---------------------------------------------------------------------------
# HTTP 요청 / 응답 모델
# ---------------------------------------------------------------------------

class TabRequest(BaseModel):
    tab: ActiveTab


class SessionResponse(BaseModel):
    """세션 스냅샷

    ``analysis_pending``: 업로드 직후 분석이 예약됐지만 아직 시작 전인 상태
    """
    state: SessionState
    selected_proposal_id: Optional[str] = None
    analysis_pending: bool = False
    can_generate: bool = False


class VocabularyOption(BaseModel):
    id: str
    label: str
    localized: str


class VocabularyResponse(BaseModel):
    groups: Dict[str, List[VocabularyOption]]
    defaults: GenerationSettings = Field(default_factory=lambda: DEFAULT_SETTINGS)
