"""
ArchiScape 예외

GeminiService에서 발생하고 RenderController가 받아서
사용자에게 보여줄 메시지 하나로 바꾼다.
"""


class ArchiscapeError(Exception):
    """ArchiScape 예외의 기본 클래스"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message


class ConfigurationError(ArchiscapeError):
    """Gemini API 키가 없거나 공백 (재시도하지 않음)"""
    pass


class UpstreamError(ArchiscapeError):
    """Gemini 호출 실패 (전송 또는 API 오류)"""
    pass


class NoImageProduced(UpstreamError):
    """정상 응답이지만 이미지 파트가 없음"""

    def __init__(self, message: str = "No image data found in the response.", details: dict = None):
        super().__init__(message, details)


class AnalysisParseError(ArchiscapeError):
    """분석 응답이 비었거나 스키마와 맞지 않음"""
    pass
