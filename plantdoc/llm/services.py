"""
具体 LLM 实现。

新增 LLM 供应商：在此文件添加一个类，然后在 factory.py 注册即可。

已注册供应商：
  anthropic — ClaudeService   (claude-sonnet-4-20250514)
  openai    — OpenAIService   (gpt-4o)
  gemini    — GeminiService   (gemini-2.0-flash，REST API)
"""

import base64
import os

import requests

from .base import BaseLLMService
from .types import LLMResponse


# ── ClaudeService ──────────────────────────────────────────────────────────
#
# 使用 Anthropic SDK。
# 环境变量：ANTHROPIC_API_KEY
# 模型：claude-sonnet-4-20250514（可通过 ANTHROPIC_MODEL 覆盖）

class ClaudeService(BaseLLMService):

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    @staticmethod
    def _image_block(image):
        if image.is_remote:
            return {"type": "image", "source": {"type": "url", "url": image.data}}
        return {
            "type": "image",
            "source": {"type": "base64", "media_type": image.media_type, "data": image.data},
        }

    def complete(self, system_prompt, user_prompt, image=None):
        import anthropic

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set")

        model = os.getenv("ANTHROPIC_MODEL", self.DEFAULT_MODEL)
        client = anthropic.Anthropic(api_key=api_key, timeout=self.timeout)

        content = [{"type": "text", "text": user_prompt}]
        if image is not None:
            content.insert(0, self._image_block(image))

        response = client.messages.create(
            model=model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": content}],
        )

        return LLMResponse(
            content=response.content[0].text,
            model=model,
        )


# ── OpenAIService ──────────────────────────────────────────────────────────
#
# 使用 OpenAI SDK。
# 环境变量：OPENAI_API_KEY
# 模型：gpt-4o（可通过 OPENAI_MODEL 覆盖）

class OpenAIService(BaseLLMService):

    DEFAULT_MODEL = "gpt-4o"

    def complete(self, system_prompt, user_prompt, image=None):
        import openai

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set")

        model = os.getenv("OPENAI_MODEL", self.DEFAULT_MODEL)
        client = openai.OpenAI(api_key=api_key, timeout=self.timeout)

        user_content = [{"type": "text", "text": user_prompt}]
        if image is not None:
            user_content.append({"type": "image_url", "image_url": {"url": image.as_data_url()}})

        response = client.chat.completions.create(
            model=model,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user",   "content": user_content},
            ],
        )

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=model,
        )


# ── GeminiService ──────────────────────────────────────────────────────────
#
# 直接调 Generative Language REST API（requests），不依赖 Google SDK。
# 环境变量：GEMINI_API_KEY
# 模型：gemini-2.0-flash（可通过 GEMINI_MODEL 覆盖）
#
# Gemini 的 inlineData 只收 base64，远程图片先下载再内联。

class GeminiService(BaseLLMService):

    DEFAULT_MODEL = "gemini-2.0-flash"
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def _inline_image(self, image):
        if not image.is_remote:
            return {"inlineData": {"mimeType": image.media_type, "data": image.data}}

        resp = requests.get(image.data, timeout=self.timeout)
        resp.raise_for_status()
        media_type = resp.headers.get("Content-Type", image.media_type).split(";")[0].strip()
        return {
            "inlineData": {
                "mimeType": media_type or image.media_type,
                "data": base64.b64encode(resp.content).decode("utf-8"),
            }
        }

    def complete(self, system_prompt, user_prompt, image=None):
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY is not set")

        model = os.getenv("GEMINI_MODEL", self.DEFAULT_MODEL)

        parts = [{"text": user_prompt}]
        if image is not None:
            parts.append(self._inline_image(image))

        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"maxOutputTokens": self.max_tokens},
        }

        resp = requests.post(
            self.API_URL.format(model=model),
            params={"key": api_key},
            json=payload,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()

        candidates = data.get("candidates") or []
        if not candidates:
            raise ValueError(f"Gemini returned no candidates: {data.get('promptFeedback')}")

        content_parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in content_parts)

        return LLMResponse(
            content=text,
            model=model,
        )
