from django.urls import path
from . import views

app_name = 'partners'

urlpatterns = [
    path('', views.partner_list_view, name='partner_list'),
    path('create/', views.partner_create_view, name='partner_create'),
]
