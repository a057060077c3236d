"""Database schema definitions"""

USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT UNIQUE NOT NULL,           -- always stored lower-cased
    password_hash TEXT NOT NULL,             -- bcrypt hash of password
    sec_q INTEGER NOT NULL DEFAULT 0,        -- index into SECURITY_QUESTIONS
    sec_a TEXT NOT NULL DEFAULT '',          -- trimmed, lower-cased answer
    is_admin INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""

ENTRIES_TABLE = """
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    date TEXT NOT NULL,
    bed_time TEXT NOT NULL,
    wake_time TEXT NOT NULL,
    duration REAL NOT NULL,
    screen_time REAL NOT NULL,
    energy INTEGER NOT NULL,
    notes TEXT DEFAULT '',
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    UNIQUE(user_id, date)
)
"""

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_users_is_admin ON users(is_admin)",
    "CREATE INDEX IF NOT EXISTS idx_entries_user_date ON entries(user_id, date DESC)",
]

# All tables in order of creation
ALL_TABLES = [
    USERS_TABLE,
    ENTRIES_TABLE,
]
