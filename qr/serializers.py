from rest_framework import serializers
from .models import QRCode

HEX_COLOR = r'^#[0-9a-fA-F]{6}$'


class QRCodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = QRCode
        fields = ['id','code','url','kind','target_id','is_active','views','scans','last_visited_at','created_at']


class QRStatsSerializer(serializers.Serializer):
    code = serializers.CharField()
    kind = serializers.CharField()
    is_active = serializers.BooleanField()
    views = serializers.IntegerField()
    scans = serializers.IntegerField()
    last_visited_at = serializers.DateTimeField(allow_null=True)
    recent_visits = serializers.IntegerField()


class QRImageOptionsSerializer(serializers.Serializer):
    dark = serializers.RegexField(HEX_COLOR, required=False, default='#000000')
    light = serializers.RegexField(HEX_COLOR, required=False, default='#FFFFFF')
    scale = serializers.IntegerField(required=False, default=10, min_value=1, max_value=40)


class QRVisitSerializer(serializers.Serializer):
    code = serializers.CharField()
    views = serializers.IntegerField()
    scans = serializers.IntegerField()
