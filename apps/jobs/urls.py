from django.urls import path
from . import views

app_name = 'jobs'

urlpatterns = [
    path('', views.job_board_view, name='job_board'),
    path('create/', views.job_create_view, name='job_create'),
    path('<int:pk>/change-status/', views.job_change_status_view, name='job_change_status'),
]
