"""
BaseImageAdapter — 所有图片输入 Adapter 的抽象基类。

每种新的图片输入格式只需：
1. 继承 BaseImageAdapter
2. 实现 matches()、parse() 和 transform()
3. 在 factory.py 的 _build_registry() 注册一行

业务代码无需任何改动。
"""

from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ValidationError
from .types import ImageInput


class BaseImageAdapter(ABC):
    """
    三步流水线：parse → transform → validate

    子类必须实现 parse() 和 transform()；
    validate() 只做通用的非空检查，不解码图片内容（解码失败算上游错误，不算 400）。
    """

    # 子类声明自己对应的 kind（与 ImageInput.kind 一致）
    kind: str = ""

    def __init__(self, raw_image: str):
        self._raw_image = raw_image
        self._parsed: Any = None

    # ── 必须实现 ───────────────────────────────────────────────────────────

    @classmethod
    @abstractmethod
    def matches(cls, raw_image: str) -> bool:
        """这个 Adapter 能否处理该原始字符串。factory 按注册顺序逐个询问。"""

    @abstractmethod
    def parse(self) -> Any:
        """
        解析原始字符串 → 中间结构。
        应将解析结果赋值给 self._parsed 以便 transform() 使用。
        """

    @abstractmethod
    def transform(self) -> ImageInput:
        """
        将 self._parsed 转换为 ImageInput。
        必须把原始字符串存入 ImageInput.raw_payload。
        """

    # ── 提供默认实现，子类可 override ──────────────────────────────────────

    def validate(self, image: ImageInput) -> None:
        if not image.data:
            raise ValidationError(
                message="Image data is empty.",
                code="INVALID_IMAGE",
                detail={"kind": image.kind},
            )

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def process(self) -> ImageInput:
        """parse → transform → validate，返回校验通过的 ImageInput。"""
        self.parse()
        image = self.transform()
        self.validate(image)
        return image
