from django.urls import path
from . import views

app_name = 'voice'

urlpatterns = [
    path('', views.voice_entry_view, name='voice_entry'),
    path('submit/', views.voice_submit_view, name='voice_submit'),
]
