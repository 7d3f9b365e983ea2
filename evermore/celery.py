import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'evermore.settings')

app = Celery('evermore')

# CELERY_* Django settings, e.g. CELERY_TASK_ALWAYS_EAGER -> task_always_eager
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
