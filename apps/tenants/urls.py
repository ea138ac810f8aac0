from django.urls import path
from . import views

app_name = 'tenants'

urlpatterns = [
    path('settings/', views.settings_view, name='settings'),
    path('settings/business/', views.business_settings_view, name='business_settings'),
    path('settings/branding/', views.branding_settings_view, name='branding_settings'),
    path('tenants/switch/', views.switch_tenant_view, name='switch'),
]
