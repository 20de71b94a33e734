from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./vocassion.db"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://vocassion.app,https://admin.vocassion.app"
    CORS_ORIGINS: str = "*"

    # Identity normally comes from the auth proxy headers.
    # DEV_MODE maps every request to DEV_USER_ID instead.
    DEV_MODE: bool = False
    DEV_USER_ID: str = "dev-user"

    # Pusher Channels credentials. Broadcasting is skipped when any is missing.
    PUSHER_APP_ID: str = ""
    PUSHER_KEY: str = ""
    PUSHER_SECRET: str = ""
    PUSHER_CLUSTER: str = "eu"
    CHAT_CHANNEL: str = "chat-channel"
    LEADERBOARD_CHANNEL: str = "leaderboard-channel"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def pusher_enabled(self) -> bool:
        return bool(self.PUSHER_APP_ID and self.PUSHER_KEY and self.PUSHER_SECRET)


settings = Settings()
