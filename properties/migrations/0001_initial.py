from decimal import Decimal
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('location', models.CharField(blank=True, default='', max_length=200)),
                ('property_type', models.CharField(choices=[('residential', 'Residential'), ('commercial', 'Commercial'), ('hospitality', 'Hospitality'), ('retail', 'Retail')], default='residential', max_length=20)),
                ('total_tokens', models.PositiveIntegerField(help_text='Total token supply', validators=[django.core.validators.MinValueValidator(1)])),
                ('tokens_sold', models.PositiveIntegerField(default=0, help_text='Tokens sold so far (never above total_tokens)')),
                ('token_price', models.DecimalField(decimal_places=2, help_text='Price of one token', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('estimated_roi', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=20)),
                ('is_verified', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('seller', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'ordering': ['-created_at', '-id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('tokens_sold__lte', models.F('total_tokens'))), name='property_tokens_sold_within_supply'),
                    models.CheckConstraint(condition=models.Q(('tokens_sold__gte', 0)), name='property_tokens_sold_non_negative'),
                    models.CheckConstraint(condition=models.Q(('total_tokens__gt', 0)), name='property_total_tokens_positive'),
                    models.CheckConstraint(condition=models.Q(('token_price__gt', 0)), name='property_token_price_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TokenPurchase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tokens_purchased', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('total_cost', models.DecimalField(decimal_places=2, max_digits=19)),
                ('purchase_date', models.DateTimeField(auto_now_add=True)),
                ('certificate_issued', models.BooleanField(default=False)),
                ('certificate_url', models.CharField(blank=True, default='', max_length=500)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='token_purchases', to=settings.AUTH_USER_MODEL)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='purchases', to='properties.property')),
            ],
            options={
                'verbose_name': 'Token purchase',
                'verbose_name_plural': 'Token purchases',
                'ordering': ['-purchase_date', '-id'],
                'indexes': [models.Index(fields=['property', 'buyer'], name='purchase_property_buyer_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('tokens_purchased__gt', 0)), name='purchase_tokens_positive')],
            },
        ),
        migrations.CreateModel(
            name='Certificate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('certificate_number', models.CharField(max_length=32, unique=True)),
                ('property_title', models.CharField(max_length=200)),
                ('tokens_owned', models.PositiveIntegerField()),
                ('issue_date', models.DateTimeField(auto_now_add=True)),
                ('document_url', models.CharField(blank=True, default='', max_length=500)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='certificates', to=settings.AUTH_USER_MODEL)),
                ('purchase', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='certificate', to='properties.tokenpurchase')),
            ],
            options={
                'verbose_name': 'Certificate',
                'verbose_name_plural': 'Certificates',
                'ordering': ['-issue_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ProfitDistribution',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=19)),
                ('per_token_amount', models.DecimalField(decimal_places=10, max_digits=28)),
                ('distribution_date', models.DateTimeField(auto_now_add=True)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='profit_distributions', to=settings.AUTH_USER_MODEL)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='distributions', to='properties.property')),
            ],
            options={
                'verbose_name': 'Profit distribution',
                'verbose_name_plural': 'Profit distributions',
                'ordering': ['-distribution_date', '-id'],
            },
        ),
    ]
