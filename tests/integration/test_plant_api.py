"""
Integration tests — 真实 HTTP 请求打到 Django View，验证完整流程。

用 Django test Client，走完：
  HTTP Request → urls.py → View → intake → Service → normalizer → Response

模型服务被 FakeAdvisor 替换（patch views.build_plant_advisor），不实际调 LLM。
每个测试验证：status_code + response body 的格式。
"""
import json
import pytest
from unittest.mock import patch
from django.test import RequestFactory

from plantdoc.views import DiseaseView
from tests.conftest import FakeAdvisor, IdentificationPayloadFactory, SuggestionFactory

IMAGE = 'data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD'


# -------------------------------------------------------------------
# Helper
# -------------------------------------------------------------------

def post_json(api_client, url, payload):
    """快捷方式：POST JSON，返回 (status_code, body_dict)。"""
    response = api_client.post(url, data=json.dumps(payload), content_type='application/json')
    return response.status_code, json.loads(response.content)


def get_json(api_client, url, **params):
    response = api_client.get(url, params)
    return response.status_code, json.loads(response.content)


@pytest.fixture
def advisor():
    fake = FakeAdvisor()
    with patch('plantdoc.views.build_plant_advisor', return_value=fake):
        yield fake


# ===================================================================
# POST /api/disease
# ===================================================================

class TestDiseaseEndpoint:

    def test_missing_image_returns_400(self, api_client, advisor):
        status, body = post_json(api_client, '/api/disease', {})

        assert status == 400
        assert body['success'] is False
        assert body['code'] == 'IMAGE_REQUIRED'
        assert body['error'] == 'Image is required'
        assert advisor.calls == []

    def test_non_object_body_returns_400(self, api_client, advisor):
        status, body = post_json(api_client, '/api/disease', ['not', 'an', 'object'])
        assert status == 400
        assert body['code'] == 'IMAGE_REQUIRED'

    def test_malformed_json_returns_400(self, api_client, advisor):
        response = api_client.post('/api/disease', data='{"image": ', content_type='application/json')
        assert response.status_code == 400

    def test_diagnosis(self, api_client, advisor):
        advisor.disease_text = (
            'Disease: Leaf Spot. Description: brown spots. Treatment: - remove leaves - apply fungicide'
        )

        status, body = post_json(api_client, '/api/disease', {'image': IMAGE})

        assert status == 200
        assert body['name'] == 'Leaf Spot'
        assert body['confidence'] == 0.7
        assert body['treatment'] == ['remove leaves', 'apply fungicide']
        assert body['prevention'] == []
        # 成功响应没有 success / type 字段
        assert 'success' not in body

        image = advisor.calls[0][1]
        assert image.kind == 'data_url'
        assert image.media_type == 'image/jpeg'

    def test_trailing_slash(self, api_client, advisor):
        advisor.disease_text = 'The plant looks healthy.'
        status, body = post_json(api_client, '/api/disease/', {'image': IMAGE})

        assert status == 200
        assert body['name'] == 'Healthy Plant'

    def test_upstream_failure_returns_200_error_record(self, api_client, advisor):
        advisor.disease_text = RuntimeError('model unavailable')

        status, body = post_json(api_client, '/api/disease', {'image': IMAGE})

        assert status == 200
        assert body == {
            'name': 'Error',
            'description': 'Failed to analyze plant health',
            'treatment': [],
            'prevention': [],
            'confidence': 0.0,
        }

    def test_injected_advisor(self):
        fake = FakeAdvisor(disease_text='Condition: Rust')
        request = RequestFactory().post(
            '/api/disease', data=json.dumps({'image': 'https://example.com/leaf.jpg'}),
            content_type='application/json',
        )

        response = DiseaseView.as_view(advisor=fake)(request)

        assert response.status_code == 200
        assert json.loads(response.content)['name'] == 'Rust'
        assert fake.calls[0][1].kind == 'url'


# ===================================================================
# POST /api/identify
# ===================================================================

class TestIdentifyEndpoint:

    def test_missing_image_returns_400(self, api_client, advisor):
        status, body = post_json(api_client, '/api/identify', {'image': ''})

        assert status == 400
        assert body['code'] == 'IMAGE_REQUIRED'

    def test_invalid_image_type_returns_400(self, api_client, advisor):
        status, body = post_json(api_client, '/api/identify', {'image': {'uri': 'x'}})

        assert status == 400
        assert body['code'] == 'INVALID_IMAGE'

    def test_fenced_json(self, api_client, advisor):
        advisor.identification_text = '```json\n{"name":"Rose","confidence":0.9}\n```'

        status, body = post_json(api_client, '/api/identify', {'image': 'base64data'})

        assert status == 200
        assert body == {
            'name': 'Rose',
            'scientificName': 'Unknown',
            'description': 'No description available',
            'careTips': [],
            'problems': [],
            'confidence': 0.9,
        }

    def test_full_identification(self, api_client, advisor):
        payload = IdentificationPayloadFactory()
        advisor.identification_text = json.dumps(payload)

        status, body = post_json(api_client, '/api/identify', {'image': IMAGE})

        assert status == 200
        assert body['careTips'] == payload['careTips']
        assert body['scientificName'] == 'Rosa indica'

    def test_prose_returns_error_record(self, api_client, advisor):
        advisor.identification_text = 'I think this is a money plant.'

        status, body = post_json(api_client, '/api/identify', {'image': IMAGE})

        assert status == 200
        assert body['name'] == 'Error'
        assert body['problems'] == ['Failed to process the identification data']

    def test_upstream_failure_returns_error_record(self, api_client, advisor):
        advisor.identification_text = ValueError('GEMINI_API_KEY is not set')

        status, body = post_json(api_client, '/api/identify', {'image': IMAGE})

        assert status == 200
        assert body['description'] == 'Failed to identify plant'
        assert body['problems'] == ['API error occurred']
        assert body['confidence'] == 0

    def test_deeply_nested_json_returns_error_record(self, api_client, advisor):
        advisor.identification_text = '{"a":' * 100000 + '1' + '}' * 100000

        status, body = post_json(api_client, '/api/identify', {'image': IMAGE})

        assert status == 200
        assert body['name'] == 'Error'
        assert body['problems'] == ['Failed to process the identification data']


# ===================================================================
# GET /api/suggestions
# ===================================================================

class TestSuggestionsEndpoint:

    def test_missing_region_returns_400(self, api_client, advisor):
        status, body = get_json(api_client, '/api/suggestions')

        assert status == 400
        assert body['success'] is False
        assert body['code'] == 'REGION_REQUIRED'
        assert body['error'] == 'Region is required'
        assert advisor.calls == []

    def test_blank_region_returns_400(self, api_client, advisor):
        status, _ = get_json(api_client, '/api/suggestions', region='  ')
        assert status == 400

    def test_region_suggestions(self, api_client, advisor):
        advisor.suggestions = SuggestionFactory.build_batch(3)

        status, body = get_json(api_client, '/api/suggestions', region='Kerala')

        assert status == 200
        assert body == {'success': True, 'data': advisor.suggestions}
        assert len(body['data']) == 3
        assert advisor.calls == [('get_indian_plant_suggestions', 'Kerala')]

    def test_upstream_failure_returns_500_envelope(self, api_client, advisor):
        advisor.suggestions = ConnectionError('upstream down')

        status, body = get_json(api_client, '/api/suggestions', region='Kerala')

        assert status == 500
        assert body['success'] is False
        assert body['error'] == 'Failed to fetch plant suggestions'
