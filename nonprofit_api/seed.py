#!/usr/bin/env python3
"""
Load demo data into the Nonprofit API database.

Creates an administrator, two volunteers, two donors, three upcoming
events, three completed donations and two approved volunteer
applications.  Every account gets the same password.

Usage:
    python -m nonprofit_api.seed --db ./nonprofit.db --password "password123"

If --db is omitted, the DATABASE_URL setting is used.  The script
refuses to run against a database that already has users.
"""

import argparse
import sys
from datetime import datetime
from decimal import Decimal

from nonprofit_api.app.core.config import settings
from nonprofit_api.app.core.db import init_db
from nonprofit_api.app.core.security import credentials
from nonprofit_api.app.core.storage import Storage

USERS = [
    ("Admin User", "admin@hopefoundation.org", "admin"),
    ("Sarah Johnson", "sarah@example.com", "volunteer"),
    ("Michael Chen", "michael@example.com", "volunteer"),
    ("Emily Rodriguez", "emily@example.com", "donor"),
    ("David Williams", "david@example.com", "donor"),
]

EVENTS = [
    {
        "title": "Community Park Cleanup",
        "description": "Join us for environmental action as we clean up our local park and plant trees for future generations.",
        "date": datetime(2025, 12, 15, 9, 0),
        "location": "Central Park, Main Entrance",
        "capacity": 60,
        "registered": 15,
    },
    {
        "title": "Youth Education Workshop",
        "description": "Interactive learning session focused on STEM education for underprivileged children in our community.",
        "date": datetime(2025, 12, 20, 14, 0),
        "location": "Community Learning Center",
        "capacity": 40,
        "registered": 25,
    },
    {
        "title": "Food Distribution Drive",
        "description": "Monthly food distribution program helping families in need with nutritious meals and groceries.",
        "date": datetime(2025, 12, 25, 10, 0),
        "location": "Hope Foundation Center",
        "capacity": 100,
        "registered": 60,
    },
]

# (donor email, amount, type, payment id)
DONATIONS = [
    ("emily@example.com", "100.00", "one-time", "pay_demo_1"),
    ("david@example.com", "250.00", "monthly", "pay_demo_2"),
    ("emily@example.com", "50.00", "one-time", "pay_demo_3"),
]

APPLICATIONS = [
    (
        "sarah@example.com",
        "(555) 123-4567",
        "weekends",
        ["Education & Tutoring", "Event Organization"],
        "I'm passionate about education and want to help in any way I can.",
    ),
    (
        "michael@example.com",
        "(555) 234-5678",
        "flexible",
        ["Food Distribution", "Environmental Projects"],
        "I have experience with community outreach and would love to contribute.",
    ),
]


def seed(password: str) -> dict:
    """Insert the demo rows and return the created users keyed by email."""
    password_hash = credentials.hash_password(password)
    users = {}
    for name, email, role in USERS:
        users[email] = Storage.create_user(name, email, password_hash, role)

    for event in EVENTS:
        fields = {key: value for key, value in event.items() if key != "registered"}
        Storage.create_event(fields, registered=event["registered"])

    for email, amount, donation_type, payment_id in DONATIONS:
        user = users[email]
        Storage.create_donation(
            user["id"],
            {
                "amount": Decimal(amount),
                "donation_type": donation_type,
                "status": "completed",
                "payment_id": payment_id,
                "donor_name": user["name"],
                "donor_email": user["email"],
            },
        )

    for email, phone, availability, interests, message in APPLICATIONS:
        user = users[email]
        application = Storage.create_volunteer_application(
            user["id"],
            {
                "name": user["name"],
                "email": user["email"],
                "phone": phone,
                "availability": availability,
                "interests": interests,
                "message": message,
            },
        )
        Storage.update_application_status(application["id"], "approved", applicant_role="volunteer")
    return users


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the Nonprofit API database with demo data.")
    ap.add_argument("--db", help="Path to the SQLite database file (defaults to DATABASE_URL)")
    ap.add_argument("--password", default="password123", help="Password given to every demo account")
    args = ap.parse_args()

    if args.db:
        settings.database_url = args.db
    init_db()

    if Storage.list_users():
        print("[!] Database already contains users.", file=sys.stderr)
        sys.exit(1)

    users = seed(args.password)
    print(f"[+] Seeded {len(users)} users, {len(EVENTS)} events, {len(DONATIONS)} donations.")
    print("\nDemo user credentials:")
    for name, email, role in USERS:
        print(f"  {role:<9} {email} / {args.password}")


if __name__ == "__main__":
    main()
