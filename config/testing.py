from config.base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"
LOG_LEVEL = "WARNING"
AUTO_INIT_DB = False
