from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "devcred"
    mongo_max_pool_size: int = 10

    # Outbound HTTP
    http_timeout: float = 10.0
    http_max_retries: int = 3
    http_verify_ssl: bool = True  # set False behind corporate SSL-inspection proxies

    # NFT metadata resolver
    metadata_cache_size: int = 1000
    metadata_cache_ttl: float = 3600.0  # seconds
    ipfs_gateway_host: str = "cloudflare-ipfs.com"
    storage_scheme: str = "ipfs"

    # GitHub
    github_client_id: str = ""
    github_client_secret: str = ""
    github_redirect_uri: str = "http://localhost:5173/auth/callback"
    github_oauth_url: str = "https://github.com/login/oauth/access_token"
    github_api_url: str = "https://api.github.com"
    github_token: str | None = None

    # Logging
    log_level: str = "INFO"


settings = Settings()
