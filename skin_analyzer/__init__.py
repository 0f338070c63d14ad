# skin photo -> Gemini -> Arabic treatment plan
from .errors import SkinAnalyzerError
from .session import OperationState, OperationStatus, SkinAnalysisSession

__all__ = ["SkinAnalyzerError", "OperationState", "OperationStatus", "SkinAnalysisSession"]
