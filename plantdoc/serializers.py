"""
Response serializers — result record → JSON-able dict。

只负责「输出格式化」（snake_case → 前端要的 camelCase），不做任何解析或校验。
解析在 normalizers.py，输入校验在 intake/ adapter 系统。
"""


def serialize_diagnosis(result):
    """Serialize DiagnosisResult for /api/disease."""
    return {
        'name': result.name,
        'description': result.description,
        'treatment': list(result.treatment),
        'prevention': list(result.prevention),
        'confidence': result.confidence,
    }


def serialize_identification(result):
    """Serialize IdentificationResult for /api/identify."""
    return {
        'name': result.name,
        'scientificName': result.scientific_name,
        'description': result.description,
        'careTips': list(result.care_tips),
        'problems': list(result.problems),
        'confidence': result.confidence,
    }


def serialize_suggestion(suggestion):
    return {
        'name': suggestion.name,
        'scientificName': suggestion.scientific_name,
        'description': suggestion.description,
    }


def serialize_suggestions(suggestions):
    """Success envelope for /api/suggestions. data 原样透传。"""
    return {
        'success': True,
        'data': suggestions,
    }
