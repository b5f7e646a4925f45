"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py make-admin --email a@b.com    # Promote a customer to admin
"""

import argparse
import sys


def bootstrap():
    """Load every storefront element and connect the configured adapters."""
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database(domain):
    from storefront.utils.db import setup_db

    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database(domain):
    from storefront.utils.db import drop_db

    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def make_admin(domain, email):
    """Grant the admin role to the customer registered with ``email``.

    Returns False when no customer has that email.
    """
    from storefront.customer.customer import Customer, CustomerRole
    from storefront.customer.roles import ChangeCustomerRole

    with domain.domain_context():
        customer = domain.repository_for(Customer).find_by_email(email)
        if customer is None:
            print(f"No customer registered with {email}. They must log in once first.")
            return False

        domain.process(
            ChangeCustomerRole(customer_id=str(customer.id), role=CustomerRole.ADMIN.value),
            asynchronous=False,
        )
    print(f"{email} is now an admin.")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("make-admin", help="Promote a customer to admin")
    admin_parser.add_argument("--email", required=True, help="Email of an existing customer")

    args = parser.parse_args(argv)
    domain = bootstrap()

    if args.command == "setup-db":
        setup_database(domain)
    elif args.command == "drop-db":
        drop_database(domain)
    elif args.command == "make-admin" and not make_admin(domain, args.email):
        sys.exit(1)


if __name__ == "__main__":
    main()
