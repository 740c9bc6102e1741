from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Cinema Booking API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    ADMIN_SECRET_KEY: str = "change-this-admin-secret"

    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "cinema_booking"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Showtimes
    SHOWTIME_REQUIRE_FUTURE: bool = True
    SHOWTIME_UTC_OFFSET_MINUTES: int = 330  # naive admin input is IST
    SHOWTIME_CONFLICT_RETRIES: int = 3

    DEFAULT_PRICE_CLASSIC: int = 200
    DEFAULT_PRICE_PRIME: int = 350
    DEFAULT_PRICE_RECLINER: int = 550
    DEFAULT_PRICE_PREMIUM: int = 870

    # Bookings
    VERIFY_BOOKING_TOTAL: bool = False
    NOTIFICATIONS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
