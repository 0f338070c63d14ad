import base64

from skin_analyzer.models import EncodedPayload
from skin_analyzer.prompts import SKIN_ANALYSIS_PROMPT, AnalysisRequest, build_analysis_request

# one phrase per required clause, in the order the prompt must present them
CLAUSES = [
    "خبير أمراض جلدية متخصص في المنتجات المصرية",  # role + market
    "تحليل المشكلات الجلدية",                        # diagnose
    "خطة علاج شاملة ومفصلة باللغة العربية الفصحى",    # plan, register
    "متوفرة في السوق المصري",                         # local products
    "الجرعة، التكرار، مدة الاستخدام",                  # dosage
    "نصائح إضافية للعناية بالبشرة",                    # advice
    "ابدأ بالتشخيص ثم خطة العلاج ثم النصائح",          # layout
    "لا تغني عن زيارة الطبيب المختص",                  # disclaimer
]


def test_prompt_has_every_clause_in_order():
    positions = [SKIN_ANALYSIS_PROMPT.find(c) for c in CLAUSES]

    assert all(p >= 0 for p in positions), positions
    assert positions == sorted(positions)


def test_request_is_instruction_then_image():
    payload = EncodedPayload(data=base64.b64encode(b"\x89PNG fake").decode(), media_type="image/png")

    request = build_analysis_request(payload)
    contents = request.contents()

    assert isinstance(request, AnalysisRequest)
    assert contents[0] == SKIN_ANALYSIS_PROMPT
    assert contents[1] == {"mime_type": "image/png", "data": b"\x89PNG fake"}


def test_template_does_not_depend_on_the_image():
    a = build_analysis_request(EncodedPayload(data="AAAA", media_type="image/png"))
    b = build_analysis_request(EncodedPayload(data="////", media_type="image/gif"))

    assert a.instruction == b.instruction == SKIN_ANALYSIS_PROMPT
