from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from django.shortcuts import get_object_or_404

from evermore.permissions import IsOwner
from profiles.models import Profile
from profiles.serializers import ProfilePublicSerializer
from . import services
from .models import QRCode
from .serializers import QRCodeSerializer, QRStatsSerializer, QRImageOptionsSerializer, QRVisitSerializer
from .utils import client_ip, client_user_agent


class OwnedQRMixin:
    permission_classes = [IsOwner]

    def get_owned_qr(self, request, code, active_only=True):
        qr = services.resolve_code(code, active_only=active_only)
        self.check_object_permissions(request, qr)
        return qr


class QRList(APIView):

    def get(self, request):
        qrs = QRCode.objects.filter(created_by=request.user, is_active=True).order_by('-created_at')
        return Response(QRCodeSerializer(qrs, many=True).data)


class QRGenerateForProfile(APIView):

    def post(self, request, profile_id):
        profile = get_object_or_404(Profile, pk=profile_id, owner=request.user)
        options = QRImageOptionsSerializer(data=request.data)
        options.is_valid(raise_exception=True)

        qr = services.create_qr_for_profile(profile, request.user)
        data = QRCodeSerializer(qr).data
        data['qr_image'] = services.render_qr_image(qr, **options.validated_data)
        return Response(data, status=status.HTTP_201_CREATED)


class QRDetail(OwnedQRMixin, APIView):

    def get(self, request, code):
        qr = self.get_owned_qr(request, code)
        return Response(QRCodeSerializer(qr).data)


class QRStats(OwnedQRMixin, APIView):

    def get(self, request, code):
        # deactivated codes keep their history
        qr = self.get_owned_qr(request, code, active_only=False)
        return Response(QRStatsSerializer(services.get_stats(qr)).data)


class QRImage(OwnedQRMixin, APIView):

    def get(self, request, code):
        qr = self.get_owned_qr(request, code)
        options = QRImageOptionsSerializer(data=request.query_params)
        options.is_valid(raise_exception=True)
        return Response({
            'code': qr.code,
            'url': qr.url,
            'image': services.render_qr_image(qr, **options.validated_data),
        })


class QRDeactivate(OwnedQRMixin, APIView):

    def post(self, request, code):
        qr = services.deactivate(self.get_owned_qr(request, code))
        return Response({'code': qr.code, 'is_active': qr.is_active})


class QRTrackVisit(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request, code):
        qr = services.track_visit(code, client_ip(request), client_user_agent(request))
        return Response(QRVisitSerializer(qr).data)


class MemorialAccess(APIView):
    """Public page behind the printed QR code."""
    authentication_classes = []
    permission_classes = []

    def get(self, request, code):
        qr = services.resolve_code(code)
        if qr.kind != services.KIND_PROFILE:
            return Response({'detail': 'Unsupported QR type'}, status=status.HTTP_400_BAD_REQUEST)
        profile = services.resolve_target(qr)

        # tracking is best effort and must not break the page
        visit_registered = services.track_visit_safely(qr, client_ip(request), client_user_agent(request))

        return Response({
            'memorial': ProfilePublicSerializer(profile).data,
            'qr': {
                'code': qr.code,
                'kind': qr.kind,
                'views': qr.views,
                'scans': qr.scans,
            },
            'visit_registered': visit_registered,
        })
