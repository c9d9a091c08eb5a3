from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Application
    app_name: str = "RideShift API"
    debug: bool = False
    port: int = 8000
    log_level: str = "INFO"

    # Database (in-memory unless overridden)
    database_url: str = "sqlite+aiosqlite:///:memory:"
    seed_demo_data: bool = True

    # Redis (events are only logged when unset)
    redis_url: Optional[str] = None

    # Fare
    base_fare: float = 2.50
    per_km_rate: float = 1.20
    per_minute_rate: float = 0.25

    # Commission
    default_commission_rate: float = 0.15
    min_commission_rate: float = 0.05
    max_commission_rate: float = 0.25

    # Mock trip used for the fare estimate at request time
    mock_ride_distance_m: float = 5000
    mock_ride_duration_s: float = 900
    average_city_speed_kmh: float = 30.0

    # Simulated latency of external collaborators (seconds)
    mock_latency_scale: float = 1.0
    payment_delay: float = 2.0
    payment_status_delay: float = 0.5
    nft_mint_delay: float = 3.0
    nft_transfer_delay: float = 2.0
    geocode_delay: float = 0.5
    realtime_delay: float = 0.1

    nft_contract_address: str = "0x1234567890123456789012345678901234567890"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
