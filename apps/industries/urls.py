from django.urls import path

from . import api

app_name = 'industries'

urlpatterns = [
    path('industries/', api.IndustryListView.as_view(), name='industry_list'),
    path('industries/<str:industry_id>/', api.IndustryDetailView.as_view(), name='industry_detail'),
]
