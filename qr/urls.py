from django.urls import path
from .api import (
    QRList, QRGenerateForProfile, QRDetail, QRStats, QRImage, QRDeactivate, QRTrackVisit, MemorialAccess,
)

urlpatterns = [
    path('api/qr/', QRList.as_view(), name='qr-list'),
    path('api/qr/generate/<int:profile_id>/', QRGenerateForProfile.as_view(), name='qr-generate'),
    path('api/qr/<str:code>/', QRDetail.as_view(), name='qr-detail'),
    path('api/qr/<str:code>/stats/', QRStats.as_view(), name='qr-stats'),
    path('api/qr/<str:code>/image/', QRImage.as_view(), name='qr-image'),
    path('api/qr/<str:code>/deactivate/', QRDeactivate.as_view(), name='qr-deactivate'),
    path('api/qr/<str:code>/visit/', QRTrackVisit.as_view(), name='qr-visit'),
    path('memorial/<str:code>/', MemorialAccess.as_view(), name='memorial-access'),
]
