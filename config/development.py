import os

from config.config import Config, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

STORE_BACKEND = Config.STORE_BACKEND
TIMEZONE = Config.TIMEZONE
HOURS_DECIMALS = Config.HOURS_DECIMALS

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, database/schema.sql is applied on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
