"""Gemini 호출용 프롬프트 템플릿

두 빌더 모두 순수 함수 (I/O 없음, 같은 입력 -> 같은 문자열).
"""
from ..models.schemas import GenerationSettings
from ..models.vocabulary import (
    LandscapeStyle,
    SceneType,
    Season,
    TimeOfDay,
    label,
)


def _exterior_task(settings: GenerationSettings, has_reference: bool) -> str:
    lines = [
        "TASK:",
        "Transform the first input image into a PHOTOREALISTIC EXTERIOR ARCHITECTURAL RENDERING.",
        "1. MATERIALITY: You MUST apply realistic materials to the building geometry.",
        "2. PRESERVATION: Keep the original building geometry, perspective, and camera angle EXACTLY as is.",
        f'3. LANDSCAPE: Generate a "{label(settings.style)}" landscape.',
    ]
    if has_reference:
        lines.append(
            "4. Derive the vegetation density, plant species, and color grading from the "
            "Reference Image instead of inventing them."
        )
    lines.append(
        f'{len(lines) - 1}. ATMOSPHERE: Lighting must match '
        f'"{label(settings.time)}" in "{label(settings.season)}".'
    )
    return "\n".join(lines)


def _interior_task(settings: GenerationSettings, has_reference: bool) -> str:
    style = label(settings.interior_style)
    if has_reference:
        furnishing = "4. FURNITURE & DECOR: Apply the color palette and mood from the Reference Image."
    else:
        furnishing = f'4. FURNITURE & DECOR: Populate or re-render furniture consistent with "{style}".'

    return "\n".join([
        "TASK:",
        "Transform the first input image into a PHOTOREALISTIC INTERIOR ARCHITECTURAL RENDERING.",
        "1. MATERIALITY: You MUST apply realistic interior materials to the walls, floor, and ceiling.",
        "2. PRESERVATION: Keep the original room geometry, perspective, and camera angle EXACTLY as is.",
        f'3. INTERIOR STYLE: Apply a "{style}" interior design style.',
        furnishing,
        f'5. LIGHTING: Simulate natural lighting based on "{label(settings.time)}".',
    ])


REFERENCE_INSTRUCTIONS = """REFERENCE IMAGE INSTRUCTION:
The second image provided is a STYLE REFERENCE.
You MUST extract the following from the Reference Image and apply it to the Input Architecture:
1. Vegetation Types & Density (Trees, plants, flowers).
2. Color Palette & Tones.
3. Lighting Condition & Atmosphere.
4. Human elements/activity style if present.

Do NOT copy the geometry of the reference image. Apply its VIBE and STYLE to the Input Architecture."""


def build_generation_prompt(settings: GenerationSettings, has_reference: bool = False) -> str:
    """generate 호출 1회의 렌더링 지시문 생성

    섹션 순서: 역할 문구, 입력, 장면 작업, 참고 이미지 지시(참고 이미지가
    있을 때만), 추가 디테일, 마지막 사진 품질 지시.
    ``prompt_enhancement``는 그대로 삽입.
    """
    inputs = ["INPUTS:", "Image 1: Target Architecture (White model/Line drawing)."]
    if has_reference:
        inputs.append("Image 2: Style Reference.")

    if settings.scene_type == SceneType.INTERIOR:
        task = _interior_task(settings, has_reference)
    else:
        task = _exterior_task(settings, has_reference)

    sections = [
        "Act as a world-class architectural visualizer.",
        "\n".join(inputs),
        task,
    ]
    if has_reference:
        sections.append(REFERENCE_INSTRUCTIONS)
    sections.append(f"ADDITIONAL DETAILS:\nAdd {settings.prompt_enhancement}.")
    sections.append("Make it look like a high-end photograph, suitable for publication.")

    return "\n\n".join(sections)


def _options(enum_cls) -> str:
    return ", ".join(f"{member.value} ({label(member)})" for member in enum_cls)


def build_analysis_prompt() -> str:
    """건축 분석 호출용 고정 지시문"""
    return f"""Act as a senior architect and landscape designer.

Analyze the provided architectural image.

1. Identify the ARCHITECTURAL STYLE of the building and explain your confidence
   (which visual cues support the identification) in the "confidence" field.
2. Detect whether the input is an untextured white model, clay render, or line drawing
   rather than a photograph, and take it into account in your proposals.
3. Generate EXACTLY 3 distinct landscape rendering proposals. Each proposal must have:
   - a short unique "id" and a "title"
   - a "rationale" explaining how it relates to the identified architecture
   - a one-sentence "description" of the resulting scene
   - "settings" with a landscape "style", a "time" of day and a "season",
     plus an optional short "prompt_enhancement" with extra scene details.

Allowed values:
- style: {_options(LandscapeStyle)}
- time: {_options(TimeOfDay)}
- season: {_options(Season)}

The three proposals must differ from each other in at least two of style, time, and season.
Respond in JSON only."""
