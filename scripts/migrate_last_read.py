"""
This script moves every user's updates read marker to the current field name.

- Scans all user documents.
- Copies the legacy 'lastReadUpdates' value into 'lastUpdatesRead', parsing
  legacy display strings ("... UTC+5") into real timestamps. An existing
  'lastUpdatesRead' is only replaced if the legacy value is newer.
- Deletes the legacy field.
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Add the project root to the Python path to allow importing 'tourneyhub'
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import firebase_admin  # noqa: E402
from firebase_admin import credentials, firestore  # noqa: E402

from tourneyhub.core.constants import (  # noqa: E402
    LAST_READ_FIELD,
    LEGACY_LAST_READ_FIELD,
    USERS_COLLECTION,
)
from tourneyhub.core.timestamps import to_datetime  # noqa: E402


def initialize_firebase():
    """Initializes the Firebase Admin SDK."""
    cred = None
    cred_path = project_root / "firebase_credentials.json"
    if cred_path.exists():
        try:
            cred = credentials.Certificate(str(cred_path))
        except Exception as e:
            print(f"Error loading credentials from file: {e}")
            return False
    else:
        cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
        if cred_json:
            try:
                cred = credentials.Certificate(json.loads(cred_json))
            except (json.JSONDecodeError, ValueError) as e:
                print(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")
                return False

    if not cred:
        print("Could not find Firebase credentials in file or environment variable.")
        return False

    if not firebase_admin._apps:
        firebase_admin.initialize_app(cred)
    return True


def migrate_user(doc):
    """Return the update that moves one user's marker, or None if nothing to do."""
    data = doc.to_dict() or {}
    if LEGACY_LAST_READ_FIELD not in data:
        return None

    legacy = to_datetime(data.get(LEGACY_LAST_READ_FIELD))
    current = to_datetime(data.get(LAST_READ_FIELD))
    update = {LEGACY_LAST_READ_FIELD: firestore.DELETE_FIELD}
    if legacy is not None and (current is None or legacy > current):
        update[LAST_READ_FIELD] = legacy
    elif legacy is None:
        print(
            f"User {doc.id}: could not parse {data.get(LEGACY_LAST_READ_FIELD)!r}, "
            "dropping it."
        )
    return update


def migrate_last_read(db, dry_run=False):
    """Main migration logic. Returns the number of users migrated."""
    migrated = 0
    for doc in db.collection(USERS_COLLECTION).stream():
        update = migrate_user(doc)
        if update is None:
            continue
        migrated += 1
        if dry_run:
            print(f"Would migrate user {doc.id}: {update.get(LAST_READ_FIELD)}")
            continue
        doc.reference.update(update)
        print(f"Migrated user {doc.id}.")

    print(f"\nMigration complete. {migrated} user(s) migrated.")
    return migrated


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--dry-run", action="store_true", help="Report changes without writing."
    )
    args = parser.parse_args()
    if initialize_firebase():
        migrate_last_read(firestore.client(), dry_run=args.dry_run)
