"""
ImageInput dataclass — 业务逻辑唯一认识的图片格式。

所有 Adapter 的 transform() 必须返回这个结构。
LLM 层只消费这个结构，永远不碰前端传来的原始字符串。
"""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_MEDIA_TYPE = "image/jpeg"


@dataclass
class ImageInput:
    """
    标准内部图片格式。

    kind         "data_url" / "base64" / "url"
    data         base64 payload（不含 data: 前缀），或远程图片 URL
    media_type   MIME type，前端没给时默认 image/jpeg
    raw_payload  保存原始字符串，用于排查问题，不参与业务逻辑。
    """

    kind: str
    data: str
    media_type: str = DEFAULT_MEDIA_TYPE
    raw_payload: Any = field(default=None, repr=False)

    @property
    def is_remote(self) -> bool:
        return self.kind == "url"

    def as_data_url(self) -> str:
        """base64 图片 → data URL；远程图片原样返回 URL。"""
        if self.is_remote:
            return self.data
        return f"data:{self.media_type};base64,{self.data}"
