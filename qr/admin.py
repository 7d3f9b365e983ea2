from django.contrib import admin
from .models import QRCode, VisitRecord


class VisitRecordInline(admin.TabularInline):
    model = VisitRecord
    extra = 0
    can_delete = False
    fields = ('timestamp', 'visitor_ip', 'user_agent')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(QRCode)
class QRCodeAdmin(admin.ModelAdmin):
    list_display = ('code', 'kind', 'target_id', 'views', 'scans', 'last_visited_at', 'is_active', 'created_at')
    list_filter = ('kind', 'is_active', 'created_at')
    search_fields = ('code', 'url')
    date_hierarchy = 'created_at'
    # statistics are written by visit tracking only
    readonly_fields = ('views', 'scans', 'last_visited_at', 'created_at', 'updated_at')
    inlines = [VisitRecordInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(created_by=request.user)
