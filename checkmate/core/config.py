from os import getenv


def _split(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    TASK_DB_PATH = getenv("TASK_DB_PATH", "tasks.db")
    # DATABASE_URL gagne sur TASK_DB_PATH (ex: postgresql+psycopg://...)
    DATABASE_URL = getenv("DATABASE_URL") or f"sqlite:///{TASK_DB_PATH}"
    SQL_ECHO = getenv("SQL_ECHO", "0").lower() in ("1", "true", "yes")

    HOST = getenv("HOST", "0.0.0.0")
    PORT = int(getenv("PORT", "8080"))
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = _split(getenv("CORS_ORIGINS", "*"))

    INDEX_PAGE_SIZE = int(getenv("INDEX_PAGE_SIZE", "50"))  # taille de la liste HTML

settings = Settings()
