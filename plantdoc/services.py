"""
Service 层：模型调用 + normalizer，外面包一层失败边界。

- diagnose_plant / identify_plant：上游任何异常都降级成 error-shaped record，
  View 照常返回 200，前端不需要按 HTTP status 分支。
- suggest_plants：上游失败抛 UpstreamError，由 exception_handler 返回 500 envelope。

advisor 由调用方传入，本模块不持有任何全局状态。
"""

import logging

from .exceptions import UpstreamError, ValidationError
from .normalizers import extract_disease_info, normalize_identification
from .types import DiagnosisResult, IdentificationResult

logger = logging.getLogger(__name__)


def diagnose_plant(image, advisor):
    """ImageInput → DiagnosisResult。永不抛异常。"""
    try:
        disease_text = advisor.detect_disease(image)
        logger.debug("Raw disease detection response: %s", disease_text)
        return extract_disease_info(disease_text)
    except Exception:
        logger.exception("Disease detection failed (image kind=%s)", image.kind)
        return DiagnosisResult.error()


def identify_plant(image, advisor):
    """ImageInput → IdentificationResult。永不抛异常。"""
    try:
        identification_text = advisor.identify_plant(image)
        logger.debug("Raw identification response: %s", identification_text)
        return normalize_identification(identification_text)
    except Exception:
        logger.exception("Identification failed (image kind=%s)", image.kind)
        return IdentificationResult.upstream_error()


def validate_region(region):
    """缺失 / 空白 region → ValidationError(400)。返回去掉首尾空白的 region。"""
    if region is None or not str(region).strip():
        raise ValidationError(message="Region is required", code="REGION_REQUIRED")
    return str(region).strip()


def suggest_plants(region, advisor):
    """
    region → advisor 返回的推荐列表，原样透传。

    Raises:
        ValidationError: region 缺失
        UpstreamError:   模型服务失败
    """
    region = validate_region(region)

    try:
        return advisor.get_indian_plant_suggestions(region)
    except Exception as exc:
        logger.exception("Error fetching plant suggestions for %r", region)
        raise UpstreamError(message="Failed to fetch plant suggestions") from exc
