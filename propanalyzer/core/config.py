import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    APP_ENV: str = os.getenv("APP_ENV", "local")
    APP_NAME: str = os.getenv("APP_NAME", "property-analyzer")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ALLOW_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()
    ]
    MAX_SCENARIO_EXIT_PRICES: int = int(os.getenv("MAX_SCENARIO_EXIT_PRICES", "25"))
    # request bounds for the month loops (50 year hold, 20 year construction)
    MAX_HOLDING_MONTHS: int = int(os.getenv("MAX_HOLDING_MONTHS", "600"))
    MAX_POSSESSION_MONTHS: int = int(os.getenv("MAX_POSSESSION_MONTHS", "240"))


settings = Settings()
