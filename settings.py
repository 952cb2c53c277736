"""
settings.py — Application defaults
===================================
Loaded with app.config.from_object(DefaultConfig), then overridden by
FLASK_* environment variables (app.config.from_prefixed_env()), e.g.

    FLASK_SECRET_KEY=…  FLASK_RUN_CACHE_SIZE=128  FLASK_LOG_LEVEL=DEBUG
"""

import secrets


class DefaultConfig:
    # sessions are signed with this; a fresh random key per process
    # unless FLASK_SECRET_KEY pins one
    SECRET_KEY = secrets.token_hex(32)

    DEFAULT_ALGORITHM = "longest_path"
    RUN_CACHE_SIZE    = 64

    CANVAS_WIDTH  = 800
    CANVAS_HEIGHT = 500

    LOG_LEVEL = "INFO"
    HOST      = "127.0.0.1"
    PORT      = 5000
    DEBUG     = False
