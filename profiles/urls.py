from django.urls import path
from .api import ProfileCreate, ProfileList, ProfileDetail

urlpatterns = [
    path('api/profiles/', ProfileCreate.as_view(), name='profile-create'),
    path('api/profiles/list/', ProfileList.as_view(), name='profile-list'),
    path('api/profiles/<int:profile_id>/', ProfileDetail.as_view(), name='profile-detail'),
]
