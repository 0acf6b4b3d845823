# ABOUTME: SQL DDL statements for the scorecat catalog database schema.
# ABOUTME: Defines the Authors and Works tables, applied only when the file is first created.

import sqlite3

SCHEMA_V1 = """
CREATE TABLE Authors (id TEXT, type INT, parent TEXT, permlink TEXT);

CREATE TABLE Works (
    id        TEXT,
    type      INT,
    parent    TEXT,
    permlink  TEXT,
    composer  TEXT,
    worktitle TEXT,
    icatno    TEXT,
    pageid    INT
);
"""


def apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL to create both catalog tables.

    Only called for a brand-new database; existing files are never
    re-initialized.
    """
    conn.executescript(SCHEMA_V1)
