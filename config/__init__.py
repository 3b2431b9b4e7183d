import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unrecognised means development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def split_statuses(value: str) -> list[str]:
    return [s.strip() for s in value.split(",") if s.strip()]
