"""
Management command to populate dummy data for testing.

Creates an admin, a verified seller and investors with funded wallets,
sample properties, and a few token purchases made through the purchase engine.
"""

from decimal import Decimal
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from accounts.models import Role, RoleGrant
from properties.models import Certificate, ProfitDistribution, Property, TokenPurchase
from properties.purchases import purchase_tokens
from wallet.models import Wallet
from wallet.services import deposit

User = get_user_model()

USERS = [
    {'username': 'admin', 'email': 'admin@example.com', 'roles': [Role.ADMIN, Role.USER], 'deposit': None},
    {'username': 'seller', 'email': 'seller@example.com', 'roles': [Role.VERIFIED_SELLER, Role.USER], 'deposit': None},
    {'username': 'alice', 'email': 'alice@example.com', 'roles': [Role.USER], 'deposit': '10000.00'},
    {'username': 'bob', 'email': 'bob@example.com', 'roles': [Role.USER], 'deposit': '5000.00'},
    {'username': 'charlie', 'email': 'charlie@example.com', 'roles': [Role.USER], 'deposit': '750.00'},
]

PROPERTIES = [
    {
        'title': 'Modern Downtown Apartment Complex',
        'description': 'Luxury 24-unit apartment complex in the heart of downtown.',
        'location': 'Downtown Seattle, WA',
        'property_type': Property.Type.RESIDENTIAL,
        'total_tokens': 10000,
        'token_price': Decimal('50.00'),
        'estimated_roi': Decimal('8.50'),
    },
    {
        'title': 'Industrial Warehouse Portfolio',
        'description': 'Three warehouses in a prime logistics corridor.',
        'location': 'Phoenix, AZ',
        'property_type': Property.Type.COMMERCIAL,
        'total_tokens': 15000,
        'token_price': Decimal('75.00'),
        'estimated_roi': Decimal('12.20'),
    },
    {
        'title': 'Luxury Beachfront Resort',
        'description': 'Boutique resort with 18 suites overlooking the coastline.',
        'location': 'Malibu, CA',
        'property_type': Property.Type.HOSPITALITY,
        'total_tokens': 25000,
        'token_price': Decimal('100.00'),
        'estimated_roi': Decimal('15.80'),
    },
]

PURCHASES = [
    ('alice', 'Modern Downtown Apartment Complex', 100),
    ('bob', 'Modern Downtown Apartment Complex', 40),
    ('alice', 'Industrial Warehouse Portfolio', 20),
    ('charlie', 'Luxury Beachfront Resort', 5),
]


class Command(BaseCommand):
    help = 'Populate the database with dummy users, wallets, properties and purchases for testing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new data',
        )

    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            ProfitDistribution.objects.all().delete()
            Certificate.objects.all().delete()
            TokenPurchase.objects.all().delete()
            Property.objects.all().delete()
            Wallet.objects.all().delete()
            RoleGrant.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()
            self.stdout.write(self.style.SUCCESS('Cleared existing data'))

        self.stdout.write('Creating dummy data...')

        users = {}
        for user_data in USERS:
            user, created = User.objects.get_or_create(
                username=user_data['username'],
                defaults={'email': user_data['email']}
            )
            if created:
                user.set_password('password123')
                user.save()
                self.stdout.write(f"  Created user: {user.username}")
            else:
                self.stdout.write(f"  User exists: {user.username}")

            # Seeding bypasses assign_role: there is no admin yet to authorize it
            for role in user_data['roles']:
                RoleGrant.objects.get_or_create(user=user, role=role)

            if user_data['deposit'] and not Wallet.objects.filter(user=user).exists():
                balance = deposit(user.id, user_data['deposit'])
                self.stdout.write(f"    Wallet balance: ${balance}")

            users[user.username] = user

        self.stdout.write('\nCreating sample properties...')
        properties = {}
        for property_data in PROPERTIES:
            prop, created = Property.objects.get_or_create(
                title=property_data['title'],
                defaults={**property_data, 'seller': users['seller']},
            )
            if created and not prop.is_verified:
                prop.is_verified = True
                prop.save(actor_id=users['admin'].id)
            properties[prop.title] = prop
            self.stdout.write(f"  {prop.title}: {prop.total_tokens} tokens @ ${prop.token_price}")

        if not TokenPurchase.objects.exists():
            self.stdout.write('\nCreating sample purchases...')
            for username, title, tokens in PURCHASES:
                result = purchase_tokens(users[username].id, properties[title].id, tokens)
                self.stdout.write(
                    f"  {username} bought {tokens} tokens of {title} (purchase #{result.purchase_id})"
                )

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS('=' * 50))
        self.stdout.write(self.style.SUCCESS('Dummy data created successfully!'))
        self.stdout.write(self.style.SUCCESS('=' * 50))
        self.stdout.write('')
        self.stdout.write('Test Credentials (all use password: password123):')
        self.stdout.write('')
        self.stdout.write('  Username     Roles')
        self.stdout.write('  ---------    --------')
        for user_data in USERS:
            roles = ', '.join(user_data['roles'])
            self.stdout.write(f"  {user_data['username']:<12} {roles}")
        self.stdout.write('')
