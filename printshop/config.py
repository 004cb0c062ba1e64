from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./printshop.db"
    COMPANY_NAME: str = "Print Shop"
    CURRENCY: str = "UGX"

    # Film (DTF) pricing: flat presets per unit, custom prints per meter
    FILM_PRESET_A4_PRICE: float = 5000.0
    FILM_PRESET_A3_PRICE: float = 10000.0
    FILM_RATE_PER_METER: float = 15000.0

    # Catalog products at or below this count show as low stock when the
    # product carries no min_stock_level of its own
    DEFAULT_LOW_STOCK_LEVEL: int = 5

    # Identity: tokens are issued by the hosted auth provider, verified here
    JWT_SECRET: str = ""  # REQUIRED in production, fail loudly if missing at auth time
    JWT_ALGORITHM: str = "HS256"

    class Config:
        env_file = ".env"


settings = Settings()
