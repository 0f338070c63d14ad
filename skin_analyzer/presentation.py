import re
from typing import Any, Dict, List

from .session import OperationStatus, SkinAnalysisSession

DISCLAIMER = (
    "Powered by Gemini API. This tool is for informational purposes only "
    "and not a substitute for professional medical advice."
)

_BLANK_LINE = re.compile(r"\n\s*\n")


def split_paragraphs(text: str) -> List[str]:
    # paragraphs are separated by one or more blank lines
    return [p.strip() for p in _BLANK_LINE.split(text or "") if p.strip()]


def render_state(session: SkinAnalysisSession) -> Dict[str, Any]:
    # everything the page needs to draw itself, nothing it has to compute
    state = session.state
    result = None
    if state.status is OperationStatus.SUCCEEDED and state.result:
        result = {
            "text": state.result,
            "paragraphs": split_paragraphs(state.result),
            "dir": "rtl",
            "lang": "ar",
        }

    return {
        "status": state.status.value,
        "is_loading": session.is_submitting,
        "can_submit": session.image is not None and not session.is_submitting,
        "preview_url": session.preview_url,
        "filename": session.image.filename if session.image else None,
        "error": state.error,
        "result": result,
        "disclaimer": DISCLAIMER,
    }
