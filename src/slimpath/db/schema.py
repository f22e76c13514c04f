"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Users known to the tracking engine (fallback biometrics for tracking requests)
CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    age INTEGER,
    height REAL,
    activity_level TEXT CHECK(activity_level IN ('sedentary', 'lightlyActive', 'moderatelyActive', 'veryActive', 'extraActive') OR activity_level IS NULL),
    created_at TIMESTAMP NOT NULL
);

-- One row per tracking initialization; updates mutate the latest row
CREATE TABLE IF NOT EXISTS tracking_records (
    record_id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    current_weight REAL NOT NULL CHECK(current_weight >= 0),
    initial_weight REAL NOT NULL CHECK(initial_weight >= 0),
    goal_weight REAL NOT NULL CHECK(goal_weight >= 0),
    age INTEGER NOT NULL CHECK(age >= 0),
    height REAL NOT NULL CHECK(height >= 0),
    activity_level TEXT NOT NULL CHECK(activity_level IN ('sedentary', 'lightlyActive', 'moderatelyActive', 'veryActive', 'extraActive')),
    duration_weeks INTEGER NOT NULL CHECK(duration_weeks >= 1),
    daily_calories INTEGER NOT NULL CHECK(daily_calories >= 0),
    meal_distribution_json TEXT NOT NULL,
    weekly_progress_json TEXT NOT NULL DEFAULT '[]',
    progress_notes_json TEXT NOT NULL DEFAULT '[]',
    progress_patterns_json TEXT,
    adherence_json TEXT,
    chart_data_json TEXT,
    recommendations_json TEXT,
    progress_percentage REAL NOT NULL DEFAULT 0 CHECK(progress_percentage BETWEEN 0 AND 100),
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(user_id)
);

CREATE INDEX IF NOT EXISTS idx_tracking_records_user_created ON tracking_records(user_id, created_at DESC);
"""

KNOWN_TABLES = ("users", "tracking_records")


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
