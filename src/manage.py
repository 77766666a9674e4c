"""Arduino Day PH merch management CLI.

Creates and drops the database schemas of both domains and seeds the
catalogue with the merchandise collection.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db --domain ordering
    python src/manage.py seed-catalogue           # Load the default collection
    python src/manage.py seed-catalogue --file merch.json
"""

import argparse
import json
import sys

DOMAIN_NAMES = ["catalogue", "ordering"]

DEFAULT_COLLECTION = [
    {
        "name": "ADPH Classic Tee",
        "price": 450.0,
        "sizes": ["XS", "S", "M", "L", "XL", "2XL"],
        "image": "/merch/classic-tee.png",
        "tone": "teal",
        "tag": "Apparel",
    },
    {
        "name": "Maker Hoodie",
        "price": 1200.0,
        "sizes": ["S", "M", "L", "XL"],
        "image": "/merch/maker-hoodie.png",
        "tone": "ink",
        "tag": "Apparel",
    },
    {
        "name": "Arduino Day Tote",
        "price": 350.0,
        "sizes": [],
        "image": "/merch/tote.png",
        "tone": "sand",
        "tag": "Accessories",
    },
    {
        "name": "Sticker Pack",
        "price": 120.0,
        "sizes": [],
        "image": "/merch/stickers.png",
        "tone": "amber",
        "tag": "Accessories",
    },
]


def _load_domains(names=None):
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    all_domains = {"catalogue": catalogue, "ordering": ordering}
    return {name: all_domains[name] for name in (names or DOMAIN_NAMES)}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _load_domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _load_domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_catalogue(path=None):
    """Add each collection entry as a catalogue item, keeping the listed order."""
    from catalogue.domain import catalogue
    from catalogue.merch.management import AddMerchItem

    collection = DEFAULT_COLLECTION
    if path:
        with open(path, encoding="utf-8") as handle:
            collection = json.load(handle)

    catalogue.init()
    with catalogue.domain_context():
        for position, entry in enumerate(collection):
            item_id = catalogue.process(
                AddMerchItem(
                    name=entry["name"],
                    price=entry["price"],
                    sizes=json.dumps(entry.get("sizes") or []),
                    image=entry.get("image"),
                    tone=entry.get("tone"),
                    tag=entry.get("tag"),
                    sort_order=entry.get("sort_order", position),
                ),
                asynchronous=False,
            )
            print(f"  added {entry['name']} ({item_id})")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Arduino Day PH merch management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    seed_parser = subparsers.add_parser("seed-catalogue", help="Load the merchandise collection")
    seed_parser.add_argument("--file", help="JSON list of items (default: built-in collection)")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-catalogue":
        seed_catalogue(args.file)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
