"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from micr_gateway.domain.models import MicrSymbols


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "micr-gateway"
    log_level: str = "INFO"

    # MICR E-13B delimiter glyphs (override with ASCII placeholders for scanners that emit them)
    micr_transit_symbol: str = "⑆"
    micr_amount_symbol: str = "⑇"
    micr_on_us_symbol: str = "⑈"
    micr_dash_symbol: str = "⑉"

    # Institution search
    institution_search_limit: int = 20
    institution_search_min_length: int = 2

    def micr_symbols(self) -> MicrSymbols:
        return MicrSymbols(
            transit=self.micr_transit_symbol,
            amount=self.micr_amount_symbol,
            on_us=self.micr_on_us_symbol,
            dash=self.micr_dash_symbol,
        )


settings = Settings()
