from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [

    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('password/reset/', views.password_reset_request_view, name='password_reset'),
    path('password/recovery/', views.password_recovery_view, name='password_recovery'),
    path('password/update/', views.password_update_view, name='password_update'),
]
