"""
Add share-link fields to the quotes table

Migration to add:
- share_token (unique, backfilled for existing quotes)
- share_expires_at
- client_approved / client_approved_at
- change_request

Run with: python run_migration.py add_share_link_fields
"""

import sys
import uuid
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text

from app.database import engine

NEW_COLUMNS = {
    "share_token": "VARCHAR(36)",
    "share_expires_at": "TIMESTAMP",
    "client_approved": "BOOLEAN NOT NULL DEFAULT FALSE",
    "client_approved_at": "TIMESTAMP",
    "change_request": "TEXT",
}


def upgrade():
    """Add share-link fields"""
    with engine.connect() as conn:
        existing_columns = {column["name"] for column in inspect(conn).get_columns("quotes")}

        for name, ddl in NEW_COLUMNS.items():
            if name in existing_columns:
                print(f"ℹ️  {name} column already exists")
                continue
            conn.execute(text(f"ALTER TABLE quotes ADD COLUMN {name} {ddl}"))
            print(f"✅ Added {name} column")

        # Every quote needs its own token before the unique index goes on
        missing = conn.execute(text("SELECT id FROM quotes WHERE share_token IS NULL")).fetchall()
        for (quote_id,) in missing:
            conn.execute(
                text("UPDATE quotes SET share_token = :token WHERE id = :id"),
                {"token": str(uuid.uuid4()), "id": quote_id},
            )
        if missing:
            print(f"✅ Backfilled share tokens for {len(missing)} quotes")

        conn.execute(
            text("CREATE UNIQUE INDEX IF NOT EXISTS ix_quotes_share_token ON quotes (share_token)")
        )
        print("✅ Ensured unique index on share_token")

        conn.commit()
        print("\n✅ Migration completed successfully!")


def downgrade():
    """Remove share-link fields"""
    with engine.connect() as conn:
        conn.execute(text("DROP INDEX IF EXISTS ix_quotes_share_token"))
        for name in NEW_COLUMNS:
            conn.execute(text(f"ALTER TABLE quotes DROP COLUMN IF EXISTS {name}"))
            print(f"✅ Dropped {name} column")
        conn.commit()
        print("\n✅ Downgrade completed successfully!")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "downgrade":
        downgrade()
    else:
        upgrade()
