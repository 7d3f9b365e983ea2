from django.conf import settings
from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from django.db import connection
from django.core.cache import cache
import logging

logger = logging.getLogger(__name__)

class HealthCheckView(APIView):
    authentication_classes = []
    permission_classes = []

    def get(self, request):
        checks = {
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
        }

        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            checks['database'] = 'ok'
        except Exception as e:
            logger.error(f"Health check: database unavailable: {e}")
            checks['database'] = f'error: {str(e)}'
            checks['status'] = 'degraded'

        try:
            cache.set('health-check', 'ok', 5)
            checks['cache'] = 'ok' if cache.get('health-check') == 'ok' else 'miss'
        except Exception as e:
            logger.error(f"Health check: cache unavailable: {e}")
            checks['cache'] = f'error: {str(e)}'
            checks['status'] = 'degraded'

        # visits only go through celery in async mode
        if settings.QR_TRACK_VISITS_ASYNC:
            try:
                from celery import current_app
                replies = current_app.control.inspect(timeout=1).ping()
                checks['celery'] = 'ok' if replies else 'no_workers'
            except Exception as e:
                checks['celery'] = f'error: {str(e)}'
        else:
            checks['celery'] = 'disabled'

        return Response(checks)
