"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting defaults that many modules
can import.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/sql_template/global_config.py, go up two levels: src/sql_template -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "sql-template"
PACKAGE_NAME = "sql_template"

# Database directories
DB_DIR: Path = PROJECT_ROOT / "db"
DEFAULT_DB_PATH: Path = DB_DIR / f"{PROJECT_NAME}-dev.sqlite"

# Driver defaults
SQLITE_TIMEOUT_S = 5.0

# Number of SQL characters echoed in DEBUG logs
SQL_LOG_PREVIEW = 80

# Operations on one SqlTemplate instance run one at a time unless disabled
SERIALIZE_OPERATIONS = True
