import os


class Config:
    """Defaults shared by the development and production modules."""

    # memory | mysql
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory")

    # IANA zone defining "today"; empty = host local time
    TIMEZONE = os.environ.get("TIMEZONE", "")
    HOURS_DECIMALS = int(os.environ.get("HOURS_DECIMALS", "2"))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_timeclock"),
    }
