from config.config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORE_BACKEND = "memory"
TIMEZONE = "UTC"
HOURS_DECIMALS = 2

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
