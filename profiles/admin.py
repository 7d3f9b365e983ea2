from django.contrib import admin
from django.utils.html import format_html
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'birth_date', 'death_date', 'owner', 'qr_link', 'is_public', 'is_active', 'created_at')
    list_filter = ('is_public', 'is_active', 'created_at')
    search_fields = ('full_name', 'city', 'cemetery', 'qr__code')
    readonly_fields = ('qr', 'created_at', 'updated_at')

    def qr_link(self, obj):
        if not obj.qr:
            return '-'
        return format_html('<a href="{}" target="_blank">{}</a>', obj.qr.url, obj.qr.code)
    qr_link.short_description = 'QR'

    def get_queryset(self, request):
        qs = super().get_queryset(request).select_related('qr', 'owner')
        if request.user.is_superuser:
            return qs
        return qs.filter(owner=request.user)
