from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('', views.dashboard_view, name='dashboard'),
    path('inventory/', views.inventory_view, name='inventory'),
    path('appointments/', views.appointments_view, name='appointments'),
    path('compliance/', views.compliance_view, name='compliance'),
]
