import importlib
import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module(env=None) -> str:
    # APP_ENV picks the module; anything unknown falls back to development
    env = (env or os.getenv("APP_ENV", "development")).strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")


def load_settings(env=None):
    return importlib.import_module(get_settings_module(env))
