"""
具体 Adapter 实现。

新增图片格式：在此文件添加一个类，然后在 factory.py 注册即可。

已注册格式（按 factory 中的匹配顺序）：
  data_url — DataUrlAdapter    ("data:image/png;base64,iVBORw0...")
  url      — RemoteUrlAdapter  ("https://example.com/leaf.jpg")
  base64   — Base64Adapter     (裸 base64 字符串，兜底)
"""

import re
from typing import Any
from urllib.parse import urlparse

from ..exceptions import ValidationError
from .base import BaseImageAdapter
from .types import DEFAULT_MEDIA_TYPE, ImageInput

DATA_URL_RE = re.compile(r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^,;]*)*),(?P<data>.*)$", re.DOTALL | re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s+")


# ── DataUrlAdapter ─────────────────────────────────────────────────────────
#
# 浏览器 FileReader.readAsDataURL() 的输出：
#   data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAA...
#
# media type 缺省时按 image/jpeg 处理。

class DataUrlAdapter(BaseImageAdapter):
    kind = "data_url"

    @classmethod
    def matches(cls, raw_image: str) -> bool:
        return raw_image.lstrip().lower().startswith("data:")

    def parse(self) -> Any:
        match = DATA_URL_RE.match(self._raw_image.strip())
        if match is None:
            raise ValidationError(
                message="Image data URL is malformed.",
                code="INVALID_IMAGE",
            )
        self._parsed = match.groupdict()
        return self._parsed

    def transform(self) -> ImageInput:
        parsed = self._parsed
        return ImageInput(
            kind=self.kind,
            data=WHITESPACE_RE.sub("", parsed["data"] or ""),
            media_type=(parsed["media_type"] or DEFAULT_MEDIA_TYPE).lower(),
            raw_payload=self._raw_image,
        )


# ── RemoteUrlAdapter ───────────────────────────────────────────────────────
#
# 前端直接给图片地址：
#   https://example.com/uploads/leaf.jpg
#
# 只接受 http / https。media type 按扩展名猜，猜不到就用默认值。

class RemoteUrlAdapter(BaseImageAdapter):
    kind = "url"

    _EXTENSION_MEDIA_TYPES = {
        ".png": "image/png",
        ".webp": "image/webp",
        ".gif": "image/gif",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
    }

    @classmethod
    def matches(cls, raw_image: str) -> bool:
        return raw_image.lstrip().lower().startswith(("http://", "https://"))

    def parse(self) -> Any:
        self._parsed = urlparse(self._raw_image.strip())
        return self._parsed

    def _guess_media_type(self) -> str:
        path = self._parsed.path.lower()
        for ext, media_type in self._EXTENSION_MEDIA_TYPES.items():
            if path.endswith(ext):
                return media_type
        return DEFAULT_MEDIA_TYPE

    def transform(self) -> ImageInput:
        return ImageInput(
            kind=self.kind,
            data=self._parsed.geturl(),
            media_type=self._guess_media_type(),
            raw_payload=self._raw_image,
        )

    def validate(self, image: ImageInput) -> None:
        super().validate(image)
        if not self._parsed.netloc:
            raise ValidationError(
                message="Image URL has no host.",
                code="INVALID_IMAGE",
                detail={"url": image.data},
            )


# ── Base64Adapter ──────────────────────────────────────────────────────────
#
# 兜底：其他任何字符串都当作裸 base64（JPEG）。
# 不在这里解码校验，内容坏了由模型服务报错，services.py 降级处理。

class Base64Adapter(BaseImageAdapter):
    kind = "base64"

    @classmethod
    def matches(cls, raw_image: str) -> bool:
        return True

    def parse(self) -> Any:
        self._parsed = WHITESPACE_RE.sub("", self._raw_image)
        return self._parsed

    def transform(self) -> ImageInput:
        return ImageInput(
            kind=self.kind,
            data=self._parsed,
            raw_payload=self._raw_image,
        )
