from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    Vercel/Render provide env vars; locally you can use backend/.env.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Shopify Storefront API
    SHOPIFY_STORE_DOMAIN: str = ""
    SHOPIFY_STOREFRONT_TOKEN: str = ""
    SHOPIFY_STOREFRONT_API_VERSION: str = "2024-07"
    SHOPIFY_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "0.1.0"
    BUILD_ID: str = "dev"


# ✅ MUST EXIST: other modules import this
settings = Settings()


@dataclass(frozen=True)
class StorefrontConfig:
    """
    Everything the Storefront client needs, built once per request from Settings.
    The core pipeline never sees this object; only the page fetcher does.
    """
    store_domain: str
    token: str
    api_version: str = "2024-07"
    timeout_seconds: float = 30.0

    @property
    def endpoint(self) -> str:
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"

    @property
    def store_base_url(self) -> str:
        return f"https://{self.store_domain}"

    @classmethod
    def from_settings(cls, s: Settings) -> "StorefrontConfig":
        return cls(
            store_domain=(s.SHOPIFY_STORE_DOMAIN or "").strip(),
            token=(s.SHOPIFY_STOREFRONT_TOKEN or "").strip(),
            api_version=(s.SHOPIFY_STOREFRONT_API_VERSION or "2024-07").strip(),
            timeout_seconds=s.SHOPIFY_TIMEOUT_SECONDS,
        )

    def is_complete(self) -> bool:
        return bool(self.store_domain and self.token)
