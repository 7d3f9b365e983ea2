import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('qr', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=100)),
                ('birth_date', models.DateField()),
                ('death_date', models.DateField()),
                ('photo_url', models.URLField(blank=True, max_length=500)),
                ('epitaph', models.CharField(blank=True, max_length=200)),
                ('city', models.CharField(blank=True, max_length=50)),
                ('country', models.CharField(blank=True, max_length=50)),
                ('cemetery', models.CharField(blank=True, max_length=100)),
                ('biography', models.TextField(blank=True, max_length=10000)),
                ('profession', models.CharField(blank=True, max_length=100)),
                ('family', models.JSONField(blank=True, default=dict)),
                ('is_public', models.BooleanField(default=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='profiles', to=settings.AUTH_USER_MODEL)),
                ('qr', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='profile', to='qr.qrcode')),
            ],
            options={
                'indexes': [models.Index(fields=['owner', 'is_active'], name='profile_owner_active_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('death_date__gte', models.F('birth_date'))), name='profile_death_after_birth'),
                ],
            },
        ),
    ]
