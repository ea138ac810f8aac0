from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.core.views import home_view

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('', home_view, name='home'),
    path('accounts/', include('apps.accounts.urls')),
    path('dashboard/', include('apps.core.urls')),
    path('contacts/', include('apps.contacts.urls')),
    path('jobs/', include('apps.jobs.urls')),
    path('partners/', include('apps.partners.urls')),
    path('voice/', include('apps.voice.urls')),
    path('', include('apps.tenants.urls')),
    path('api/', include('apps.industries.urls')),

]

if settings.DEBUG:
    # Static files (CSS, JS, images)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
