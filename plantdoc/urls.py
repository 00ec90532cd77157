from django.urls import re_path
from .views import DiseaseView, IdentifyView, SuggestionsView

urlpatterns = [
    re_path(r'^disease/?$', DiseaseView.as_view(), name='disease'),
    re_path(r'^identify/?$', IdentifyView.as_view(), name='identify'),
    re_path(r'^suggestions/?$', SuggestionsView.as_view(), name='suggestions'),
]
