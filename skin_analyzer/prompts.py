from dataclasses import dataclass
from typing import Any, Dict, List

from .encoder import decode_payload
from .models import EncodedPayload

# fixed instruction sent with every photo, no runtime parameters
# order matters: role, diagnosis, plan, local products, dosage, advice, layout, disclaimer
SKIN_ANALYSIS_PROMPT = """
أنت خبير أمراض جلدية متخصص في المنتجات المصرية. سأقوم بتحميل صورة لجلد.
مهمتك هي:
1.  تحليل المشكلات الجلدية الظاهرة في الصورة بدقة.
2.  تقديم خطة علاج شاملة ومفصلة باللغة العربية الفصحى.
3.  تضمين أسماء منتجات وأدوية محددة متوفرة في السوق المصري، مع ذكر الشركات المصنعة إذا أمكن.
4.  شرح طريقة استخدام كل منتج أو دواء بالتفصيل (الجرعة، التكرار، مدة الاستخدام).
5.  تقديم نصائح إضافية للعناية بالبشرة ذات الصلة بالحالة.
6.  تنظيم الرد في فقرات واضحة وسهلة القراءة. ابدأ بالتشخيص ثم خطة العلاج ثم النصائح.
7.  التحذير بأن هذه استشارة أولية ولا تغني عن زيارة الطبيب المختص.

مثال على جزء من الرد المطلوب (لا تلتزم بهذا المثال حرفيا بل استخدمه كدليل للتنسيق واللغة):
"التشخيص المبدئي:
يبدو من الصورة وجود علامات لحب الشباب الالتهابي من الدرجة المتوسطة، مع بعض الرؤوس السوداء والبيضاء.

خطة العلاج المقترحة:
1.  غسول منظف: (اسم غسول مصري مناسب لحب الشباب)، يستخدم مرتين يومياً صباحاً ومساءً.
2.  كريم موضعي: (اسم كريم مصري يحتوي على مادة فعالة مثل البنزويل بيروكسايد أو الأدابالين)، يوضع طبقة رقيقة على المناطق المصابة مرة واحدة مساءً.
3.  مرطب: (اسم مرطب مصري خالي من الزيوت)، يستخدم بعد الغسول لترطيب البشرة.

نصائح إضافية:
- تجنب لمس الحبوب أو العبث بها.
- شرب كمية كافية من الماء.

تحذير:
هذه المعلومات هي لأغراض إرشادية فقط ولا تعتبر بديلاً عن الاستشارة الطبية المتخصصة. يجب مراجعة طبيب الجلدية لتقييم دقيق وخطة علاج شخصية."

الآن، قم بتحليل الصورة المرفقة وقدم الرد المطلوب.
""".strip()


@dataclass(frozen=True)
class AnalysisRequest:
    instruction: str
    image: EncodedPayload

    def contents(self) -> List[Any]:
        # the shape generate_content() takes: text part, then the inline image blob
        image_part: Dict[str, Any] = {
            "mime_type": self.image.media_type,
            "data": decode_payload(self.image),
        }
        return [self.instruction, image_part]


def build_analysis_request(payload: EncodedPayload) -> AnalysisRequest:
    return AnalysisRequest(instruction=SKIN_ANALYSIS_PROMPT, image=payload)
