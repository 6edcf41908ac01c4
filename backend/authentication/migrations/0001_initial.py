# Generated manually for the GoldFinch order desk: users and shops

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(
                    default=False,
                    help_text='Designates that this user has all permissions without explicitly assigning them.',
                    verbose_name='superuser status',
                )),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('name', models.CharField(max_length=120)),
                ('mobile', models.CharField(
                    blank=True, help_text='Mobile number used for login', max_length=20, null=True, unique=True
                )),
                ('email', models.EmailField(
                    blank=True, help_text='Email used for login', max_length=254, null=True, unique=True
                )),
                ('role', models.CharField(
                    choices=[('admin', 'Admin'), ('salesman', 'Salesman'), ('shop_owner', 'Shop Owner')],
                    db_index=True,
                    default='salesman',
                    max_length=20,
                )),
                ('request_status', models.CharField(
                    choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')],
                    db_index=True,
                    default='pending',
                    max_length=20,
                )),
                ('is_approved', models.BooleanField(default=False)),
                ('is_blocked', models.BooleanField(default=False)),
                ('is_staff', models.BooleanField(
                    default=False, help_text='Designates whether user can access the admin site'
                )),
                ('is_active', models.BooleanField(default=True)),
                ('shop_name', models.CharField(blank=True, max_length=200)),
                ('shop_address', models.TextField(blank=True)),
                ('shop_mobile', models.CharField(blank=True, max_length=20)),
                ('groups', models.ManyToManyField(
                    blank=True,
                    help_text='The groups this user belongs to.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.group',
                    verbose_name='groups',
                )),
                ('user_permissions', models.ManyToManyField(
                    blank=True,
                    help_text='Specific permissions for this user.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.permission',
                    verbose_name='user permissions',
                )),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
                'db_table': 'goldfinch_users',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Shop',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('shop_name', models.CharField(max_length=200)),
                ('address', models.TextField()),
                ('gst_number', models.CharField(blank=True, max_length=20)),
                ('is_verified', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('owner', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='owned_shops',
                    to='authentication.user',
                )),
            ],
            options={
                'db_table': 'goldfinch_shops',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddField(
            model_name='user',
            name='shop',
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name='salesmen',
                to='authentication.shop',
            ),
        ),
        migrations.AddIndex(
            model_name='user',
            index=models.Index(fields=['role', 'request_status'], name='user_role_request_idx'),
        ),
    ]
