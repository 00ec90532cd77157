"""
工厂函数：根据原始图片字符串的形态返回对应 Adapter。

新增图片格式只需：
  1. 在 adapters.py 新建 Adapter 类
  2. 在此处 _build_registry() 加一行（顺序即匹配优先级）
  不需要修改任何业务代码。
"""

from ..exceptions import ValidationError
from .base import BaseImageAdapter


def _build_registry() -> list[type[BaseImageAdapter]]:
    # 延迟导入，避免循环依赖
    from .adapters import Base64Adapter, DataUrlAdapter, RemoteUrlAdapter

    return [
        DataUrlAdapter,
        RemoteUrlAdapter,
        Base64Adapter,      # 兜底，必须放最后
    ]


def get_image_adapter(raw_image) -> BaseImageAdapter:
    """
    根据 raw_image 的形态返回已实例化的 Adapter。

    Raises:
        ValidationError: raw_image 缺失、为空或不是字符串
    """
    if raw_image is None or raw_image == "":
        raise ValidationError(message="Image is required", code="IMAGE_REQUIRED")

    if not isinstance(raw_image, str):
        raise ValidationError(
            message="Image must be a base64 string or URL.",
            code="INVALID_IMAGE",
            detail={"received_type": type(raw_image).__name__},
        )

    if not raw_image.strip():
        raise ValidationError(message="Image is required", code="IMAGE_REQUIRED")

    for adapter_cls in _build_registry():
        if adapter_cls.matches(raw_image):
            return adapter_cls(raw_image=raw_image)

    # Base64Adapter 总是匹配，走不到这里
    raise ValidationError(message="Unsupported image format.", code="INVALID_IMAGE")
