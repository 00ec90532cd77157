"""
BaseLLMService — 所有 LLM 实现的抽象基类。

每个新 LLM 只需：
1. 继承 BaseLLMService
2. 实现 complete()
3. 在 factory.py 的 _build_registry() 注册一行

advisor.py 完全不知道背后用哪家 LLM。
"""

from abc import ABC, abstractmethod
from typing import Optional

from django.conf import settings

from ..intake.types import ImageInput
from .types import LLMResponse


class BaseLLMService(ABC):

    @property
    def max_tokens(self) -> int:
        return getattr(settings, "LLM_MAX_TOKENS", 2000)

    @property
    def timeout(self) -> float:
        return getattr(settings, "LLM_TIMEOUT", 60)

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, image: Optional[ImageInput] = None) -> LLMResponse:
        """
        调用 LLM，返回标准 LLMResponse。

        Args:
            system_prompt: 系统级角色设定（"You are an expert plant pathologist..."）
            user_prompt:   用户级输入（诊断 / 识别 / 推荐的具体要求）
            image:         可选的植物照片（vision 请求）

        Returns:
            LLMResponse(content=生成文本, model=模型名)

        Raises:
            Exception: API 调用失败时抛出，由 services.py 的失败边界兜底
        """
