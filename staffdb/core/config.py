import sys
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


def build_mongo_uri(username: str, password: str, host: str, scheme: str = "mongodb") -> str:
    """Build a connection URI with URL-escaped credentials."""
    if not username:
        return f"{scheme}://{host}/"
    return f"{scheme}://{quote_plus(username)}:{quote_plus(password)}@{host}/"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    MONGO_URI: str = ""
    MONGO_USERNAME: str = ""
    MONGO_PASSWORD: str = ""
    MONGO_HOST: str = "localhost:27017"
    MONGO_SCHEME: str = "mongodb"
    MONGO_DATABASE: str = "unified_demo"
    MONGO_TIMEOUT_SECONDS: float = 10.0

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    def mongo_uri(self) -> str:
        """Effective URI: MONGO_URI wins, otherwise built from credentials. Empty if neither is set."""
        if self.MONGO_URI:
            return self.MONGO_URI
        if self.MONGO_USERNAME:
            return build_mongo_uri(self.MONGO_USERNAME, self.MONGO_PASSWORD, self.MONGO_HOST, self.MONGO_SCHEME)
        return ""


settings = Settings()
