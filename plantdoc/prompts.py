"""
Prompt 模板。

诊断 prompt 要求带标签的段落（Disease / Description / Treatment / Prevention），
normalizers.extract_disease_info 靠这些标签提取字段；
识别和推荐 prompt 要求 JSON，normalizers.strip_code_fences 负责去掉 ``` 包裹。
"""

DISEASE_SYSTEM_PROMPT = "You are an expert plant pathologist who diagnoses plant diseases from photos."

DISEASE_PROMPT = """Analyze this plant image for signs of disease, pests or nutrient deficiencies.

Respond in plain text using exactly these labelled sections:

Disease: <name of the disease or condition, or "No disease" if the plant is healthy>
Description: <one or two sentences describing the visible symptoms>
Treatment:
- <treatment step>
- <treatment step>

Prevention:
- <prevention step>
- <prevention step>

If the plant looks healthy, say so explicitly and give general care suggestions under Treatment."""

IDENTIFY_SYSTEM_PROMPT = "You are an expert botanist who identifies plants from photos."

IDENTIFY_PROMPT = """Identify the plant in this image.

Respond STRICTLY with a single JSON object and nothing else, using these keys:
{
  "name": "common name",
  "scientificName": "botanical name",
  "description": "two or three sentences about the plant",
  "careTips": ["care tip", "care tip"],
  "problems": ["common problem", "common problem"],
  "confidence": 0.0
}

"confidence" is a number between 0 and 1."""

SUGGESTIONS_SYSTEM_PROMPT = "You are an experienced horticulturist specialising in plants that grow well in India."


def build_suggestions_prompt(region):
    """Build the region-specific planting prompt."""
    return f"""Suggest 5 plants that grow well in the {region} region of India, considering its climate and soil.

Respond STRICTLY as a JSON array and nothing else. Each element must be an object with these keys:
[
  {{"name": "common name", "scientificName": "botanical name", "description": "why it suits {region} and how to grow it"}}
]"""
