"""
Normalizers — 把模型返回的自由文本转成固定结构的 record。

两个入口：
  extract_disease_info(text)      → DiagnosisResult
  normalize_identification(text)  → IdentificationResult

规则是启发式的，而且有顺序：后面的规则可以覆盖前面的结果
（healthy 检查会覆盖已匹配到的病名）。提取不到的字段静默回落到默认值，
这不是错误。
"""

import json
import logging
import math
import re

from .types import DiagnosisResult, IdentificationResult

logger = logging.getLogger(__name__)


# ── Diagnosis 规则 ─────────────────────────────────────────────────────────

DISEASE_NAME_PATTERNS = (
    re.compile(r"disease:?\s*([^.\n]+)", re.IGNORECASE),
    re.compile(r"condition:?\s*([^.\n]+)", re.IGNORECASE),
    re.compile(r"identified as:?\s*([^.\n]+)", re.IGNORECASE),
)

HEALTHY_MARKERS = ("healthy", "no disease", "no issues")

# 最多两句
DESCRIPTION_PATTERNS = (
    re.compile(r"description:?\s*([^.\n]+(?:\.[^.\n]+)?)", re.IGNORECASE),
    re.compile(r"symptoms:?\s*([^.\n]+(?:\.[^.\n]+)?)", re.IGNORECASE),
)


def _section_pattern(label):
    # 块在空行、以 "#" 开头的行、或文本末尾结束
    return re.compile(label + r":?\s*([^#]+?)(?:\n\n|\n#|$)", re.IGNORECASE)


TREATMENT_PATTERNS = (
    _section_pattern("treatment"),
    _section_pattern("recommendations"),
    _section_pattern("manage"),
)

PREVENTION_PATTERNS = (
    _section_pattern("prevention"),
    _section_pattern("prevent"),
)

SUGGESTION_PATTERNS = (
    _section_pattern("suggestions?"),
    _section_pattern("recommendations?"),
)

# "- item" / "* item" / "• item"（行首或前面有空白），"1. item" / "1) item"（行首）
LIST_MARKER_RE = re.compile(r"(?:^|\s)(?:[-*][ \t]+|•[ \t]*)|(?:^|\n)[ \t]*\d+[.)][ \t]+")
SENTENCE_SPLIT_RE = re.compile(r"\.\s+")
EMPHASIS_RE = re.compile(r"^[*_]+\s*|\s*[*_]+$")
# "**Treatment:** ..." 留下的 "** "；条目内部成对的 **bold** 不动
POINT_EMPHASIS_RE = re.compile(r"^[*_]+(?:\s+|$)|(?:^|\s+)[*_]+$")


def _first_group(patterns, text):
    """按顺序尝试，返回第一个命中的 pattern 的 group(1)；都没命中返回 None。"""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def _strip_emphasis(value):
    return EMPHASIS_RE.sub("", value.strip()).strip()


def _clean_point(value):
    return POINT_EMPHASIS_RE.sub("", value.strip()).strip()


def _list_points(section):
    points = []
    for part in LIST_MARKER_RE.split(section):
        part = _clean_point(part)
        # 只剩 markdown 符号（"**"）的片段不算
        if part and part.strip("*_# "):
            points.append(part)
    return points


def _sentence_points(section):
    points = []
    for sentence in SENTENCE_SPLIT_RE.split(section):
        sentence = _clean_point(sentence)
        if len(sentence) > 10:
            points.append(sentence.rstrip(".") + ".")
    return points


def extract_points(section):
    """
    把一个 treatment / prevention 块切成条目。

    有列表标记就按标记切；没有就按句子切，只保留长度 > 10 的句子。
    """
    if LIST_MARKER_RE.search(section):
        return _list_points(section)
    return _sentence_points(section)


def extract_disease_info(text):
    """
    Raw diagnosis text → DiagnosisResult。

    永远返回完整的 record，提取失败的字段保留默认值。
    规则顺序（每个字段 first-match-wins）：
      1. 病名（disease / condition / identified as）→ confidence 0.7
      2. healthy 检查 → 覆盖 1 的结果，confidence 0.8
      3. description / symptoms，没有则取全文前 1-2 句（> 20 字符才采用）
      4. treatment / recommendations / manage 块
      5. prevention / prevent 块
      6. 4 和 5 都为空时，尝试 suggestions / recommendations 块，结果放进 treatment
    """
    info = DiagnosisResult.default()

    if not text or not text.strip():
        return info

    logger.debug("Raw disease detection text: %s", text)

    # 1. 病名
    name = _first_group(DISEASE_NAME_PATTERNS, text)
    if name and _strip_emphasis(name):
        info.name = _strip_emphasis(name)
        info.confidence = 0.7

    # 2. healthy 检查（必须在 1 之后，覆盖病名）
    lowered = text.lower()
    if any(marker in lowered for marker in HEALTHY_MARKERS):
        info.name = "Healthy Plant"
        info.confidence = 0.8

    # 3. 描述
    description = _first_group(DESCRIPTION_PATTERNS, text)
    if description and description.strip():
        info.description = _strip_emphasis(description)
    else:
        sentences = SENTENCE_SPLIT_RE.split(text.strip())[:2]
        first_sentences = ". ".join(s.strip() for s in sentences).rstrip(".") + "."
        if len(first_sentences) > 20:
            info.description = first_sentences

    # 4. treatment
    treatment_section = _first_group(TREATMENT_PATTERNS, text)
    if treatment_section:
        logger.debug("Treatment section: %s", treatment_section)
        info.treatment = extract_points(treatment_section)

    # 5. prevention
    prevention_section = _first_group(PREVENTION_PATTERNS, text)
    if prevention_section:
        logger.debug("Prevention section: %s", prevention_section)
        info.prevention = extract_points(prevention_section)

    # 6. 兜底：通用 suggestions
    if not info.treatment and not info.prevention:
        suggestions = _first_group(SUGGESTION_PATTERNS, text)
        if suggestions:
            points = _list_points(suggestions)
            if points:
                info.treatment = points

    return info


# ── Identification 规则 ────────────────────────────────────────────────────

FENCED_BLOCK_RE = re.compile(r"```(?:json)?([\s\S]*?)```", re.IGNORECASE)


def strip_code_fences(text):
    """
    去掉包裹 JSON 的 ``` 代码块。

    两遍处理，各自兜住不同的畸形输出：
      1. 文本以 ``` / ```json 开头 → 去掉开头的 fence，以及结尾的 ```
      2. 文本任意位置有完整的 ```...``` 块 → 改用块内内容
    """
    cleaned = (text or "").strip()

    if cleaned.startswith("```"):
        if cleaned[:7].lower() == "```json":
            cleaned = cleaned[7:]
        else:
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

    match = FENCED_BLOCK_RE.search(cleaned)
    if match and match.group(1):
        cleaned = match.group(1)

    return cleaned.strip()


def _text_field(value, default):
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _list_field(value):
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def _confidence_field(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value):
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def normalize_identification(text):
    """
    Raw identification text → IdentificationResult。

    JSON 解析失败（或解析出来不是 object）时返回 IdentificationResult.parse_error()，
    同时记录原始文本和解析失败的文本。
    """
    logger.debug("Raw identification text: %s", text)

    cleaned = strip_code_fences(text)
    logger.debug("Cleaned identification text: %s", cleaned)

    try:
        plant_data = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        # 嵌套过深的 JSON 会让 json.loads 抛 RecursionError，同样按解析失败处理
        logger.error("Error parsing identification result: %s", exc)
        logger.error("Raw text: %s", text)
        logger.error("Failed text: %s", cleaned)
        return IdentificationResult.parse_error()

    if not isinstance(plant_data, dict):
        logger.error("Identification result is not a JSON object: %s", cleaned)
        return IdentificationResult.parse_error()

    return IdentificationResult(
        name=_text_field(plant_data.get("name"), "Unknown Plant"),
        scientific_name=_text_field(plant_data.get("scientificName"), "Unknown"),
        description=_text_field(plant_data.get("description"), "No description available"),
        care_tips=_list_field(plant_data.get("careTips")),
        problems=_list_field(plant_data.get("problems")),
        confidence=_confidence_field(plant_data.get("confidence")),
    )
