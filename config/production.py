import os

from config.config import Config, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
TIMEZONE = Config.TIMEZONE
HOURS_DECIMALS = Config.HOURS_DECIMALS

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
