# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "CHRONO_APP_NAME": "App display name (default: chronojobs).",
    "CHRONO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "CHRONO_DATA_DIR": "Local data directory; chronojobs.log lives here (default: .local/chronojobs).",
    # Driver
    "CHRONO_TICK_SECONDS": "Seconds between polling ticks (default: 1.0).",
    "CHRONO_CONSOLE_ENABLED": "Run the slash-command console (true/false, default: true).",
    # Heartbeat job
    "CHRONO_HEARTBEAT_ENABLED": "Register a built-in 'heartbeat' message job at startup (default: false).",
    "CHRONO_HEARTBEAT_EVERY": "Heartbeat interval, e.g. 30s / 5m / 1h (default: 1m).",
    "CHRONO_HEARTBEAT_TTL": "Heartbeat lifetime from startup, e.g. 1h / 2d (default: 1h).",
}
