"""Import the IOLP buildings and leases workbooks into the database.

Usage:
    uv run python scripts/import_data.py                       # Default workbooks
    uv run python scripts/import_data.py --buildings b.xlsx --leases l.xlsx
    uv run python scripts/import_data.py --stats               # Import, then show counts
    uv run python scripts/import_data.py --stats-only          # Only show counts

Connection settings come from DATABASE_URL or DB_HOST / DB_PORT / DB_NAME /
DB_USER / DB_PASSWORD (read from .env.local or .env).
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from iolp.importer import main


if __name__ == "__main__":
    sys.exit(main())
