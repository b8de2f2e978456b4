from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import Cart, CartItem
from apps.catalog.container import build_product_service
from apps.catalog.models import Category, Product
from apps.users.models import Role, User

CATEGORIES = [
    ("electronique", "Électronique", "Electronic devices and high-tech gear"),
    ("vetements", "Vêtements", "Fashion and clothing for everyone"),
    ("livres", "Livres", "Books and literature"),
    ("maison-jardin", "Maison & Jardin", "Everything for the home and garden"),
]

# (key, email, password, first_name, last_name, role, company_name)
USERS = [
    ("client1", "client@example.com", "password123", "Jean", "Dupont", Role.CLIENT, None),
    ("client2", "marie@example.com", "password123", "Marie", "Martin", Role.CLIENT, None),
    ("pro1", "pro@techstore.com", "password123", "Pierre", "Vendeur", Role.PRO, "TechStore SARL"),
    (
        "pro2",
        "contact@fashionboutique.fr",
        "password123",
        "Sophie",
        "Commerce",
        Role.PRO,
        "Fashion Boutique",
    ),
]

ADMIN = ("admin@nym.com", "admin123", "Admin", "System")

# (name, description, price, stock, seller key, category slugs)
PRODUCTS = [
    (
        'MacBook Pro 14"',
        "High-performance laptop with the M3 chip",
        "2499.99",
        15,
        "pro1",
        ["electronique"],
    ),
    (
        "iPhone 15 Pro",
        "Latest-generation smartphone with a Pro camera",
        "1229.00",
        25,
        "pro1",
        ["electronique"],
    ),
    (
        "AirPods Pro 2",
        "Wireless earbuds with active noise cancellation",
        "279.00",
        40,
        "pro1",
        ["electronique"],
    ),
    (
        "Floral summer dress",
        "Light dress for summer days, floral print",
        "79.99",
        30,
        "pro2",
        ["vetements"],
    ),
    ("Black slim jeans", "Slim-fit jeans in washed black", "89.90", 20, "pro2", ["vetements"]),
    (
        "Merino wool sweater",
        "Warm and comfortable, 100% merino wool",
        "129.00",
        15,
        "pro2",
        ["vetements"],
    ),
    (
        "Symfony developer guide",
        "A complete book for learning Symfony 7",
        "39.99",
        50,
        "pro1",
        ["livres"],
    ),
    (
        "Monstera plant",
        "Beautiful indoor plant, easy to care for",
        "24.99",
        12,
        "pro2",
        ["maison-jardin"],
    ),
]


class Command(BaseCommand):
    help = "Seed the demo storefront: accounts, categories and products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CartItem.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()
            User.objects.all().delete()

        self.stdout.write("Seeding users...")
        users_by_key = {}
        for key, email, password, first_name, last_name, role, company in USERS:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    role=role,
                    company_name=company,
                    is_verified=True,
                )
            users_by_key[key] = user
        email, password, first_name, last_name = ADMIN
        if not User.objects.filter(email=email).exists():
            User.objects.create_superuser(
                email=email, password=password, first_name=first_name, last_name=last_name
            )

        self.stdout.write("Seeding categories...")
        slug_to_cat = {}
        for slug, name, description in CATEGORIES:
            cat, _ = Category.objects.get_or_create(
                slug=slug,
                defaults={"name": name, "description": description, "is_active": True},
            )
            slug_to_cat[slug] = cat

        self.stdout.write("Seeding products...")
        for name, description, price, stock, seller_key, slugs in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "price": Decimal(price),
                    "stock": stock,
                    "is_active": True,
                    "seller": users_by_key[seller_key],
                },
            )
            product.categories.add(*(slug_to_cat[s] for s in slugs))

        build_product_service().invalidate()
        self.stdout.write(self.style.SUCCESS("Storefront seed completed."))
