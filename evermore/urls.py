from django.contrib import admin
from django.urls import path, include
from .views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', HealthCheckView.as_view(), name='health'),
    path('', include('profiles.urls')),
    path('', include('qr.urls')),
    path('', include('django_prometheus.urls')),
]
