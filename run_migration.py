"""
Migration runner script
Usage: python run_migration.py <migration_name> [upgrade|downgrade]

Example: python run_migration.py add_share_link_fields
"""
import importlib
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def run_migration(name: str, direction: str = "upgrade"):
    """Run upgrade() or downgrade() from migrations/<name>.py"""
    name = name[:-3] if name.endswith(".py") else name
    if not (MIGRATIONS_DIR / f"{name}.py").exists():
        logger.error(f"Migration not found: {name}")
        sys.exit(1)
    if direction not in ("upgrade", "downgrade"):
        logger.error(f"Unknown direction: {direction}")
        sys.exit(1)

    module = importlib.import_module(f"migrations.{name}")
    logger.info(f"Running {name}.{direction}()...")
    getattr(module, direction)()
    logger.info("✅ Migration completed successfully!")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        logger.error("Usage: python run_migration.py <migration_name> [upgrade|downgrade]")
        sys.exit(1)

    try:
        run_migration(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "upgrade")
    except Exception as e:
        logger.error(f"❌ Migration failed: {e}")
        sys.exit(1)
