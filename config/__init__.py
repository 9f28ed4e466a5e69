import os

_ENV_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # Chọn module cấu hình theo APP_ENV; giá trị lạ hoặc trống -> development
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_MODULES.get(env, "config.development")
