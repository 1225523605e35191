# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "LISTKEEPER_APP_NAME": "App display name (default: listkeeper).",
    "LISTKEEPER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "LISTKEEPER_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Storage (gitignored)
    "LISTKEEPER_DATA_DIR": "Local data directory, also holds listkeeper.log (default: .local/listkeeper).",
    "LISTKEEPER_STORAGE_BACKEND": "Slot backend: file | sqlite | memory (default: file).",
    "LISTKEEPER_SLOTS_DIR": "Directory for file slots (default: <data_dir>/slots).",
    "LISTKEEPER_SLOTS_DB_PATH": "SQLite slot database (default: <data_dir>/slots.sqlite3).",
    "LISTKEEPER_STORAGE_KEY": "Slot name holding the task list (default: todos).",
    # View
    "LISTKEEPER_SORT_BY_DUE": "Sort the list by due date, undated last (true/false, default: true).",
}
