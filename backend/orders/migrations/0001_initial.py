# Generated manually for the GoldFinch order desk: orders, counters, status history

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def _base_fields():
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('is_deleted', models.BooleanField(db_index=True, default=False)),
        ('deleted_at', models.DateTimeField(blank=True, null=True)),
    ]


STATUS_CHOICES = [
    ('confirmed', 'Confirmed'),
    ('order_view_and_accepted', 'Viewed & Accepted'),
    ('cad_completed', 'CAD Completed'),
    ('production_floor', 'Production Floor'),
    ('finished', 'Finished'),
    ('dispatched', 'Dispatched'),
    ('cancelled', 'Cancelled'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='OrderCounter',
            fields=_base_fields() + [
                ('name', models.CharField(max_length=50, unique=True)),
                ('seq', models.PositiveIntegerField(default=0)),
            ],
            options={
                'db_table': 'goldfinch_order_counters',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=_base_fields() + [
                ('order_code', models.CharField(
                    editable=False, help_text='ORD-YYYYMMDD-#####', max_length=20, unique=True
                )),
                ('product_name', models.CharField(max_length=200)),
                ('customer_name', models.CharField(max_length=200)),
                ('customization_details', models.TextField(blank=True)),
                ('voice_recording', models.URLField(blank=True, max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('expected_delivery_date', models.DateField(blank=True, null=True)),
                ('karatage', models.CharField(blank=True, max_length=20)),
                ('weight', models.DecimalField(blank=True, decimal_places=3, max_digits=10, null=True)),
                ('colour', models.CharField(blank=True, max_length=50)),
                ('name', models.CharField(blank=True, help_text='Name to engrave', max_length=100)),
                ('size_type', models.CharField(
                    blank=True, choices=[('plastic', 'Plastic'), ('metal', 'Metal')], max_length=10
                )),
                ('size_value', models.CharField(blank=True, max_length=50)),
                ('stone', models.BooleanField(default=False)),
                ('enamel', models.BooleanField(default=False)),
                ('matte', models.BooleanField(default=False)),
                ('rodium', models.BooleanField(default=False)),
                ('status', models.CharField(
                    choices=STATUS_CHOICES, db_index=True, default='confirmed', max_length=30
                )),
                ('priority', models.CharField(
                    choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')],
                    db_index=True,
                    default='medium',
                    max_length=10,
                )),
                ('cancel_reason', models.TextField(blank=True)),
                ('catalog', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='orders',
                    to='catalog.catalog',
                )),
                ('salesman', models.ForeignKey(
                    help_text='Salesman who placed the order',
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='orders',
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'db_table': 'goldfinch_orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderStatusHistory',
            fields=_base_fields() + [
                ('from_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=30)),
                ('to_status', models.CharField(choices=STATUS_CHOICES, max_length=30)),
                ('reason', models.TextField(blank=True)),
                ('changed_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='order_status_changes',
                    to=settings.AUTH_USER_MODEL,
                )),
                ('order', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='status_history',
                    to='orders.order',
                )),
            ],
            options={
                'verbose_name': 'Order Status History',
                'verbose_name_plural': 'Order Status History',
                'db_table': 'goldfinch_order_status_history',
                'ordering': ['created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['salesman', 'status'], name='order_salesman_status_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['status', 'created_at'], name='order_status_created_idx'),
        ),
    ]
