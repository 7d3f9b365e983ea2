from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from .models import Profile

DATE_FIELDS = ('birth_date', 'death_date')


class ProfileWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = ['full_name','birth_date','death_date','photo_url','epitaph','city','country','cemetery',
                  'biography','profession','family','is_public']

    def validate(self, attrs):
        # reuse the model rules for dates, over the stored ones on partial updates
        dates = {f: getattr(self.instance, f) for f in DATE_FIELDS} if self.instance else {}
        dates.update({f: attrs[f] for f in DATE_FIELDS if f in attrs})
        try:
            Profile(**dates).clean()
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.message_dict)
        return attrs


class ProfileListSerializer(serializers.ModelSerializer):
    qr_code = serializers.CharField(source='qr.code', default=None, read_only=True)

    class Meta:
        model = Profile
        fields = ['id','full_name','birth_date','death_date','is_public','is_active','qr_code','created_at']


class ProfilePublicSerializer(serializers.ModelSerializer):
    age_at_death = serializers.IntegerField(read_only=True)
    years_since_death = serializers.IntegerField(read_only=True)

    class Meta:
        model = Profile
        fields = ['id','full_name','birth_date','death_date','photo_url','epitaph','city','country','cemetery',
                  'biography','profession','family','age_at_death','years_since_death']


class ProfileDetailSerializer(serializers.ModelSerializer):
    qr_code = serializers.CharField(source='qr.code', default=None, read_only=True)

    class Meta:
        model = Profile
        fields = ['id','full_name','birth_date','death_date','photo_url','epitaph','city','country','cemetery',
                  'biography','profession','family','is_public','is_active','qr_code','created_at','updated_at']
