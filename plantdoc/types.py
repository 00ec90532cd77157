"""
Result records — normalizer 的输出格式。

都是 request 级别的值对象：从模型原始文本构建，交给 serializers.py 转成
JSON-able dict 后立即返回，不持久化。

default() / error() 工厂方法给出固定的 sentinel 值，前端据此展示友好提示，
不需要根据 HTTP status 分支。
"""

from dataclasses import dataclass, field


@dataclass
class DiagnosisResult:
    name: str
    description: str
    treatment: list[str] = field(default_factory=list)
    prevention: list[str] = field(default_factory=list)
    confidence: float = 0.0

    @classmethod
    def default(cls) -> "DiagnosisResult":
        """提取不到任何内容时的默认结果。"""
        return cls(
            name="No issues detected",
            description="The plant appears healthy based on the visible parts.",
            confidence=0.5,
        )

    @classmethod
    def error(cls) -> "DiagnosisResult":
        return cls(
            name="Error",
            description="Failed to analyze plant health",
            confidence=0.0,
        )


@dataclass
class IdentificationResult:
    name: str
    scientific_name: str
    description: str
    care_tips: list[str] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)
    confidence: float = 0.0

    @classmethod
    def parse_error(cls) -> "IdentificationResult":
        """模型返回了内容，但不是可解析的 JSON object。"""
        return cls(
            name="Error",
            scientific_name="Unknown",
            description="Could not identify plant. The system encountered an error processing the image.",
            problems=["Failed to process the identification data"],
        )

    @classmethod
    def upstream_error(cls) -> "IdentificationResult":
        """模型服务本身调用失败。"""
        return cls(
            name="Error",
            scientific_name="Unknown",
            description="Failed to identify plant",
            problems=["API error occurred"],
        )


@dataclass
class PlantSuggestion:
    name: str
    scientific_name: str = ""
    description: str = ""
