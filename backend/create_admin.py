#!/usr/bin/env python3
"""
Create the bootstrap administrator if the database has no admin yet.
Run from the backend directory: python create_admin.py
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from storerating.core.config import settings
from storerating.core.database import SessionLocal, init_db
from storerating.services.bootstrap import ensure_admin


def create_admin():
    init_db()
    db = SessionLocal()
    try:
        admin = ensure_admin(db)
        if admin is None:
            print("An administrator already exists (or the email is taken); nothing to do.")
            return

        print(f"\n✓ Administrator created successfully!")
        print(f"\n{'='*50}")
        print("CREDENTIALS:")
        print(f"{'='*50}")
        print(f"Email: {admin.email}")
        print(f"Password: {settings.admin_password}")
        print(f"Role: {admin.role}")
        print(f"{'='*50}")
    except Exception as e:
        db.rollback()
        print(f"\n✗ Error creating administrator: {e}")
        raise
    finally:
        db.close()


if __name__ == '__main__':
    create_admin()
