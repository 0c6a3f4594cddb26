"""
Add a role column to users

Admin access used to come from a hard-coded email list. It is now the
users.role column ('owner' or 'admin'). Emails listed in the ADMIN_EMAILS
environment variable (comma-separated) are promoted once by this migration;
after that, roles are managed through the admin API.

Run with: python run_migration.py add_user_role_field
"""

import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text

from app.database import engine


def upgrade():
    """Add role column and promote legacy admins"""
    with engine.connect() as conn:
        existing_columns = {column["name"] for column in inspect(conn).get_columns("users")}

        if "role" not in existing_columns:
            conn.execute(
                text("ALTER TABLE users ADD COLUMN role VARCHAR(20) NOT NULL DEFAULT 'owner'")
            )
            print("✅ Added role column")
        else:
            print("ℹ️  role column already exists")

        admin_emails = [
            email.strip().lower()
            for email in os.getenv("ADMIN_EMAILS", "").split(",")
            if email.strip()
        ]
        for email in admin_emails:
            result = conn.execute(
                text("UPDATE users SET role = 'admin' WHERE lower(email) = :email"),
                {"email": email},
            )
            print(f"✅ Promoted {email} to admin ({result.rowcount} row)")

        conn.commit()
        print("\n✅ Migration completed successfully!")


def downgrade():
    """Remove role column"""
    with engine.connect() as conn:
        conn.execute(text("ALTER TABLE users DROP COLUMN IF EXISTS role"))
        conn.commit()
        print("✅ Dropped role column")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "downgrade":
        downgrade()
    else:
        upgrade()
