"""
HTTP 层。

View 只做三件事：取参数 → 调 service → 序列化。
参数缺失直接 raise ValidationError，由 exception_handler 统一格式化。

advisor 注入：
  DiseaseView.as_view(advisor=fake_advisor)   # 测试 / 自定义部署
  不传时每个请求用 build_plant_advisor() 按 settings 新建一个。
"""

import logging

from django.http import JsonResponse
from rest_framework.views import APIView

from .advisor import build_plant_advisor
from .exceptions import ValidationError
from .intake import get_image_adapter
from .serializers import serialize_diagnosis, serialize_identification, serialize_suggestions
from .services import diagnose_plant, identify_plant, suggest_plants

logger = logging.getLogger(__name__)


class AdvisorMixin:
    """提供 get_advisor()；advisor 可以通过 as_view(advisor=...) 注入。"""

    advisor = None

    def get_advisor(self):
        if self.advisor is not None:
            return self.advisor
        return build_plant_advisor()


class ImageRequestMixin:

    def get_image(self, request):
        """从 JSON body 取 image，经 intake adapter 转成 ImageInput。"""
        data = request.data if isinstance(request.data, dict) else {}
        raw_image = data.get('image')
        if not raw_image:
            raise ValidationError(message="Image is required", code="IMAGE_REQUIRED")
        return get_image_adapter(raw_image).process()


class DiseaseView(AdvisorMixin, ImageRequestMixin, APIView):
    """POST /api/disease — 植物病害诊断"""

    def post(self, request):
        image = self.get_image(request)
        result = diagnose_plant(image, self.get_advisor())
        return JsonResponse(serialize_diagnosis(result))


class IdentifyView(AdvisorMixin, ImageRequestMixin, APIView):
    """POST /api/identify — 植物识别"""

    def post(self, request):
        image = self.get_image(request)
        result = identify_plant(image, self.get_advisor())
        return JsonResponse(serialize_identification(result))


class SuggestionsView(AdvisorMixin, APIView):
    """GET /api/suggestions?region=Kerala — 按地区推荐种植植物"""

    def get(self, request):
        region = request.query_params.get('region')
        suggestions = suggest_plants(region, self.get_advisor())
        logger.info("Returning %d plant suggestions for %r", len(suggestions), region)
        return JsonResponse(serialize_suggestions(suggestions))
