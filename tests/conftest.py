"""
Shared fixtures for all tests.

factory-boy factories live here so both unit/ and integration/ can import them.
不调用真实 LLM：FakeLLMService / FakeAdvisor 代替模型服务。
"""
import pytest
from django.test import Client

import factory
from plantdoc.intake.types import ImageInput
from plantdoc.llm import BaseLLMService, LLMResponse


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class SuggestionFactory(factory.DictFactory):
    name = factory.Sequence(lambda n: f'Plant {n}')
    scientificName = factory.Sequence(lambda n: f'Plantae specium{n}')
    description = 'Thrives in warm, humid coastal climates.'


class IdentificationPayloadFactory(factory.DictFactory):
    name = 'Rose'
    scientificName = 'Rosa indica'
    description = 'A woody perennial flowering plant.'
    careTips = factory.LazyFunction(lambda: ['Water deeply twice a week', 'Prune after flowering'])
    problems = factory.LazyFunction(lambda: ['Black spot', 'Aphids'])
    confidence = 0.92


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class FakeLLMService(BaseLLMService):
    """记录每次调用，按顺序返回预设的 content。"""

    def __init__(self, *contents, model='fake-model'):
        self.contents = list(contents)
        self.model = model
        self.calls = []

    def complete(self, system_prompt, user_prompt, image=None):
        self.calls.append({'system': system_prompt, 'user': user_prompt, 'image': image})
        return LLMResponse(content=self.contents.pop(0), model=self.model)


class FakeAdvisor:
    """PlantAdvisor 的替身。传 Exception 实例时对应操作会抛出它。"""

    def __init__(self, disease_text='', identification_text='', suggestions=None):
        self.disease_text = disease_text
        self.identification_text = identification_text
        self.suggestions = suggestions if suggestions is not None else []
        self.calls = []

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    def detect_disease(self, image):
        self.calls.append(('detect_disease', image))
        return self._answer(self.disease_text)

    def identify_plant(self, image):
        self.calls.append(('identify_plant', image))
        return self._answer(self.identification_text)

    def get_indian_plant_suggestions(self, region):
        self.calls.append(('get_indian_plant_suggestions', region))
        return self._answer(self.suggestions)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client():
    """Django test client for integration tests."""
    return Client()


@pytest.fixture
def sample_image():
    return ImageInput(kind='base64', data='aGVsbG8gcGxhbnQ=', media_type='image/jpeg')


@pytest.fixture
def sample_disease_text():
    return (
        "Disease: Early Blight\n"
        "Description: Dark concentric rings on older leaves. Yellowing around the lesions.\n"
        "Treatment:\n"
        "- Remove infected leaves\n"
        "- Apply a copper-based fungicide\n"
        "\n"
        "Prevention:\n"
        "1. Rotate crops every season\n"
        "2. Water at the base of the plant\n"
    )
