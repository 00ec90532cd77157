"""
PlantAdvisor — 模型推理服务。

对外只有三个操作：
  detect_disease(image)                 → 原始文本
  identify_plant(image)                 → 原始文本
  get_indian_plant_suggestions(region)  → list[dict]（已结构化）

前两个返回的文本交给 normalizers.py 处理；推荐列表在这里就解析好。
LLM 实例通过构造参数传入，测试时直接换成 fake。
"""

import json
import logging

from .exceptions import UpstreamError
from .llm import BaseLLMService, get_llm_service
from .normalizers import strip_code_fences
from .prompts import (
    DISEASE_PROMPT,
    DISEASE_SYSTEM_PROMPT,
    IDENTIFY_PROMPT,
    IDENTIFY_SYSTEM_PROMPT,
    SUGGESTIONS_SYSTEM_PROMPT,
    build_suggestions_prompt,
)
from .serializers import serialize_suggestion
from .types import PlantSuggestion

logger = logging.getLogger(__name__)


class PlantAdvisor:

    def __init__(self, llm: BaseLLMService):
        self.llm = llm

    def detect_disease(self, image):
        response = self.llm.complete(DISEASE_SYSTEM_PROMPT, DISEASE_PROMPT, image=image)
        logger.info("Disease detection answered by %s, %d chars", response.model, len(response.content))
        return response.content

    def identify_plant(self, image):
        response = self.llm.complete(IDENTIFY_SYSTEM_PROMPT, IDENTIFY_PROMPT, image=image)
        logger.info("Identification answered by %s, %d chars", response.model, len(response.content))
        return response.content

    def get_indian_plant_suggestions(self, region):
        """
        返回 [{"name", "scientificName", "description"}, ...]。

        Raises:
            UpstreamError: 模型输出不是 JSON 数组（或包着数组的 object）
        """
        response = self.llm.complete(SUGGESTIONS_SYSTEM_PROMPT, build_suggestions_prompt(region))
        logger.info("Suggestions for %r answered by %s", region, response.model)

        cleaned = strip_code_fences(response.content)
        try:
            parsed = json.loads(cleaned)
        except ValueError as exc:
            logger.error("Failed suggestions text: %s", cleaned)
            raise UpstreamError(
                message="Model returned malformed plant suggestions",
                code="MALFORMED_SUGGESTIONS",
            ) from exc

        # 有些模型会包一层 {"plants": [...]}
        if isinstance(parsed, dict):
            parsed = parsed.get("plants") or parsed.get("suggestions")

        if not isinstance(parsed, list):
            logger.error("Suggestions payload is not a list: %s", cleaned)
            raise UpstreamError(
                message="Model returned malformed plant suggestions",
                code="MALFORMED_SUGGESTIONS",
            )

        suggestions = []
        for item in parsed:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            suggestion = PlantSuggestion(
                name=str(item["name"]).strip(),
                scientific_name=str(item.get("scientificName") or "").strip(),
                description=str(item.get("description") or "").strip(),
            )
            suggestions.append(serialize_suggestion(suggestion))
        return suggestions


def build_plant_advisor(provider=None):
    """根据 settings.LLM_PROVIDER（或显式 provider）构建 PlantAdvisor。"""
    return PlantAdvisor(llm=get_llm_service(provider))
