import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('original_name', models.CharField(help_text='Filename as supplied by the client', max_length=255)),
                ('storage_key', models.CharField(editable=False, help_text='Generated name of the binary in storage', max_length=255, unique=True)),
                ('size_bytes', models.PositiveBigIntegerField(editable=False, help_text='File size in bytes')),
                ('uploaded_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'verbose_name': 'Document',
                'verbose_name_plural': 'Documents',
                'ordering': ['-uploaded_at'],
            },
        ),
    ]
