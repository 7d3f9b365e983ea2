import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contenttypes', '0002_remove_content_type_name'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='QRCode',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=32, unique=True, validators=[django.core.validators.MinLengthValidator(8)])),
                ('url', models.URLField(max_length=500)),
                ('kind', models.CharField(choices=[('profile', 'profile'), ('event', 'event'), ('gallery', 'gallery')], default='profile', max_length=16)),
                ('target_id', models.PositiveBigIntegerField()),
                ('views', models.PositiveBigIntegerField(default=0)),
                ('scans', models.PositiveBigIntegerField(default=0)),
                ('last_visited_at', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='qr_codes', to=settings.AUTH_USER_MODEL)),
                ('target_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='contenttypes.contenttype')),
            ],
            options={
                'verbose_name': 'QR code',
                'verbose_name_plural': 'QR codes',
                'indexes': [
                    models.Index(fields=['target_type', 'target_id', 'kind'], name='qr_target_idx'),
                    models.Index(fields=['created_by'], name='qr_created_by_idx'),
                    models.Index(fields=['is_active'], name='qr_active_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('scans__lte', models.F('views'))), name='qr_scans_lte_views'),
                    models.CheckConstraint(condition=models.Q(('code', ''), _negated=True), name='qr_code_not_empty'),
                    models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('target_type', 'target_id', 'kind'), name='qr_one_active_per_target'),
                ],
            },
        ),
        migrations.CreateModel(
            name='VisitRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('visitor_ip', models.CharField(blank=True, max_length=64)),
                ('user_agent', models.TextField(default='Unknown')),
                ('timestamp', models.DateTimeField()),
                ('qr', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recent_visits', to='qr.qrcode')),
            ],
            options={
                'ordering': ['-timestamp', '-id'],
                'indexes': [models.Index(fields=['qr', '-timestamp'], name='qr_visit_recent_idx')],
            },
        ),
    ]
