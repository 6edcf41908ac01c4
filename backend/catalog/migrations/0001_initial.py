# Generated manually for the GoldFinch order desk: catalog designs

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Catalog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('name', models.CharField(max_length=200)),
                ('images', models.JSONField(default=list, help_text='Image URLs')),
                ('files', models.JSONField(blank=True, default=list, help_text='STL and other 3D file URLs')),
                ('size', models.CharField(max_length=50)),
                ('weight', models.DecimalField(decimal_places=3, help_text='Weight in grams', max_digits=10)),
                ('description', models.TextField(blank=True)),
            ],
            options={
                'verbose_name': 'Catalog',
                'verbose_name_plural': 'Catalogs',
                'db_table': 'goldfinch_catalogs',
                'ordering': ['-created_at'],
            },
        ),
    ]
