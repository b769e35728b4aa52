# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLINE_APP_NAME": "Name shown in the greeting (default: taskline).",
    "TASKLINE_LOG_LEVEL": "Console log level (default: WARNING). The log file always gets DEBUG.",
    # Paths
    "TASKLINE_DATA_DIR": "Directory for local data (default: data).",
    "TASKLINE_TASKS_PATH": "Task file (default: <data_dir>/tasks.txt).",
    "TASKLINE_LOG_DIR": "Directory for taskline.log (default: <data_dir>).",
}
