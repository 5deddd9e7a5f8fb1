"""Storefront database management CLI.

Creates and drops the database schema for the storefront domain, and seeds a
small sample catalogue for local development.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load sample categories, products and services
"""

import argparse
import sys

SAMPLE_CATEGORIES = [
    ("Drawing Room", "Sofas, coffee tables and accent chairs for the living space."),
    ("Bedroom", "Beds, wardrobes and bedside tables."),
    ("Kitchen", "Dining sets, cabinets and kitchen storage."),
]

SAMPLE_PRODUCTS = [
    {
        "name": "Teak Three-Seater Sofa",
        "category": "Drawing Room",
        "description": "Solid teak frame with linen cushions.",
        "price_original": 42000.0,
        "price_discounted": 38500.0,
        "stock": 6,
        "dimensions": {"height": 85.0, "width": 210.0, "depth": 90.0},
        "materials": ["Teak", "Linen"],
    },
    {
        "name": "Walnut Coffee Table",
        "category": "Drawing Room",
        "description": "Low table with a hand-rubbed oil finish.",
        "price_original": 12500.0,
        "stock": 10,
        "dimensions": {"height": 40.0, "width": 110.0, "depth": 60.0},
        "materials": ["Walnut"],
    },
    {
        "name": "Sheesham King Bed",
        "category": "Bedroom",
        "description": "King-size bed with a slatted headboard and storage drawers.",
        "price_original": 56000.0,
        "price_discounted": 49999.0,
        "stock": 4,
        "dimensions": {"height": 110.0, "width": 190.0, "depth": 210.0},
        "materials": ["Sheesham"],
    },
    {
        "name": "Four-Seater Dining Set",
        "category": "Kitchen",
        "description": "Rubberwood table with four cushioned chairs.",
        "price_original": 27500.0,
        "stock": 8,
        "dimensions": {"height": 76.0, "width": 120.0, "depth": 80.0},
        "materials": ["Rubberwood", "Cotton"],
    },
]

SAMPLE_SERVICES = [
    {
        "name": "Home Design Consultation",
        "category": "Consultation",
        "description": "A one-hour session with a designer to plan your space.",
        "price": "Rs 1,500 per session",
        "whats_included": ["Site visit", "Mood board", "Budget estimate"],
        "duration": "1 hour",
    },
    {
        "name": "Full Interior Design",
        "category": "Interior Design",
        "description": "End-to-end design and execution for a complete home.",
        "price": "Starting at Rs 2,50,000",
        "whats_included": ["3D renders", "Material selection", "Project management"],
        "duration": "8-12 weeks",
    },
]


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_catalogue():
    """Load the sample catalogue. Categories that already exist are reused."""
    from storefront.catalogue.category.category import Category
    from storefront.catalogue.product.product import Product
    from storefront.catalogue.service.service import Service
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        category_repo = storefront.repository_for(Category)
        product_repo = storefront.repository_for(Product)
        service_repo = storefront.repository_for(Service)

        categories = {}
        for name, description in SAMPLE_CATEGORIES:
            existing = category_repo._dao.query.filter(name=name).all().first
            category = existing or Category.create(name=name, description=description)
            category_repo.add(category)
            categories[name] = category
            print(f"  category: {name}")

        for entry in SAMPLE_PRODUCTS:
            category = categories[entry["category"]]
            product_repo.add(
                Product.create(
                    name=entry["name"],
                    description=entry["description"],
                    category_id=category.id,
                    category_name=category.name,
                    price_original=entry["price_original"],
                    price_discounted=entry.get("price_discounted"),
                    stock=entry["stock"],
                    dimensions=entry["dimensions"],
                    materials=entry["materials"],
                )
            )
            print(f"  product: {entry['name']}")

        for entry in SAMPLE_SERVICES:
            service_repo.add(
                Service.create(
                    name=entry["name"],
                    category=entry["category"],
                    description=entry["description"],
                    price=entry["price"],
                    whats_included=entry["whats_included"],
                    duration=entry["duration"],
                )
            )
            print(f"  service: {entry['name']}")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load a sample catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_catalogue()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
