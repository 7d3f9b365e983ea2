import logging

from django.shortcuts import get_object_or_404
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from evermore.permissions import IsOwner
from .models import Profile
from .serializers import ProfileWriteSerializer, ProfileListSerializer, ProfileDetailSerializer

logger = logging.getLogger(__name__)


class ProfileCreate(APIView):

    def post(self, request):
        serializer = ProfileWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save(owner=request.user)
        return Response({
            'id': profile.id,
            'full_name': profile.full_name,
            'is_public': profile.is_public,
        }, status=status.HTTP_201_CREATED)


class ProfileList(APIView):

    def get(self, request):
        # only the caller's memorials
        profiles = Profile.objects.filter(owner=request.user, is_active=True).select_related('qr').order_by('-created_at')
        return Response(ProfileListSerializer(profiles, many=True).data)


class ProfileDetail(APIView):
    permission_classes = [IsOwner]

    def get_profile(self, request, profile_id):
        profile = get_object_or_404(Profile.objects.select_related('qr'), pk=profile_id, is_active=True)
        self.check_object_permissions(request, profile)
        return profile

    def get(self, request, profile_id):
        return Response(ProfileDetailSerializer(self.get_profile(request, profile_id)).data)

    def put(self, request, profile_id):
        return self.update(request, profile_id, partial=False)

    def patch(self, request, profile_id):
        return self.update(request, profile_id, partial=True)

    def update(self, request, profile_id, partial):
        profile = self.get_profile(request, profile_id)
        serializer = ProfileWriteSerializer(profile, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()
        return Response(ProfileDetailSerializer(profile).data)

    def delete(self, request, profile_id):
        # soft delete: the memorial and its QR page stop being served
        profile = self.get_profile(request, profile_id)
        profile.is_active = False
        profile.save(update_fields=['is_active', 'updated_at'])
        logger.info(f"Profile {profile.pk} deactivated by user {request.user.pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)
