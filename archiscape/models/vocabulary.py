"""장면 어휘

모든 enum 멤버는 ``VOCABULARY``에 항목이 정확히 하나: 프롬프트에 그대로 들어가는
영문 ``label``과 UI용 ``localized`` 문구.
여러 enum이 같은 값을 공유하므로 (``modern_minimalist``는 조경/실내 스타일 모두 존재)
테이블은 enum 클래스로 먼저 나눈다.
"""
from enum import Enum
from typing import Dict, List, NamedTuple, Type


class SceneType(str, Enum):
    EXTERIOR = "exterior"
    INTERIOR = "interior"


class LandscapeStyle(str, Enum):
    MODERN = "modern_minimalist"
    TROPICAL = "tropical_resort"
    ZEN = "japanese_zen"
    CHINESE = "chinese_garden"
    ENGLISH = "english_cottage"
    FOREST = "dense_forest"
    DESERT = "desert_xeriscape"


class InteriorStyle(str, Enum):
    MODERN = "modern_minimalist"
    CREAM = "cream"
    EUROPEAN = "classic_european"
    LUXURY = "light_luxury"
    INDUSTRIAL = "industrial"
    JAPANDI = "japandi"
    NEW_CHINESE = "new_chinese"


class TimeOfDay(str, Enum):
    SUNNY_NOON = "sunny_noon"
    GOLDEN_HOUR = "golden_hour"
    BLUE_HOUR = "blue_hour"
    FOGGY_MORNING = "foggy_morning"
    NIGHT = "night"
    RAINY = "rainy"


class Season(str, Enum):
    SUMMER = "summer"
    AUTUMN = "autumn"
    SPRING = "spring"
    WINTER = "winter"


class VocabularyEntry(NamedTuple):
    label: str
    localized: str


VOCABULARY: Dict[Type[Enum], Dict[str, VocabularyEntry]] = {
    SceneType: {
        SceneType.EXTERIOR.value: VocabularyEntry("Exterior", "室外"),
        SceneType.INTERIOR.value: VocabularyEntry("Interior", "室内"),
    },
    LandscapeStyle: {
        LandscapeStyle.MODERN.value: VocabularyEntry("Modern Minimalist", "现代简约"),
        LandscapeStyle.TROPICAL.value: VocabularyEntry("Tropical Resort", "热带度假"),
        LandscapeStyle.ZEN.value: VocabularyEntry("Japanese Zen Garden", "日式禅意"),
        LandscapeStyle.CHINESE.value: VocabularyEntry("Chinese Garden", "中式园林"),
        LandscapeStyle.ENGLISH.value: VocabularyEntry("English Cottage Garden", "英式花园"),
        LandscapeStyle.FOREST.value: VocabularyEntry("Dense Forest", "茂密森林"),
        LandscapeStyle.DESERT.value: VocabularyEntry("Desert Xeriscape", "沙漠耐旱"),
    },
    InteriorStyle: {
        InteriorStyle.MODERN.value: VocabularyEntry("Modern Minimalist", "现代简约"),
        InteriorStyle.CREAM.value: VocabularyEntry("Cream Style", "奶油风"),
        InteriorStyle.EUROPEAN.value: VocabularyEntry("Classic European", "欧式古典"),
        InteriorStyle.LUXURY.value: VocabularyEntry("Light Luxury", "轻奢"),
        InteriorStyle.INDUSTRIAL.value: VocabularyEntry("Industrial", "工业风"),
        InteriorStyle.JAPANDI.value: VocabularyEntry("Japandi", "日式侘寂"),
        InteriorStyle.NEW_CHINESE.value: VocabularyEntry("New Chinese", "新中式"),
    },
    TimeOfDay: {
        TimeOfDay.SUNNY_NOON.value: VocabularyEntry("Sunny Noon", "阳光午后"),
        TimeOfDay.GOLDEN_HOUR.value: VocabularyEntry("Golden Hour/Sunset", "日落金辉"),
        TimeOfDay.BLUE_HOUR.value: VocabularyEntry("Blue Hour/Twilight", "蓝调时刻"),
        TimeOfDay.FOGGY_MORNING.value: VocabularyEntry("Foggy Morning", "雾气清晨"),
        TimeOfDay.NIGHT.value: VocabularyEntry("Night with Lighting", "静谧夜晚"),
        TimeOfDay.RAINY.value: VocabularyEntry("Rainy Mood", "雨天氛围"),
    },
    Season: {
        Season.SUMMER.value: VocabularyEntry("Lush Summer", "盛夏"),
        Season.AUTUMN.value: VocabularyEntry("Colorful Autumn", "金秋"),
        Season.SPRING.value: VocabularyEntry("Blooming Spring", "春日"),
        Season.WINTER.value: VocabularyEntry("Snowy Winter", "冬雪"),
    },
}

# 설정 필드명 -> enum (UI 표시 순서)
CHOICE_GROUPS: Dict[str, Type[Enum]] = {
    "scene_type": SceneType,
    "style": LandscapeStyle,
    "interior_style": InteriorStyle,
    "time": TimeOfDay,
    "season": Season,
}


def entry(member: Enum) -> VocabularyEntry:
    return VOCABULARY[type(member)][member.value]


def label(member: Enum) -> str:
    """프롬프트에 들어가는 영문 문구"""
    return entry(member).label


def localized(member: Enum) -> str:
    return entry(member).localized


def choices(enum_cls: Type[Enum]) -> List[Dict[str, str]]:
    """enum 하나의 UI 옵션 목록"""
    return [
        {"id": member.value, "label": label(member), "localized": localized(member)}
        for member in enum_cls
    ]
