from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HC_",
    )

    # Default calculator parameters
    default_months_to_hedge: int = 12
    default_interest_rate: float = 2.0  # percent
    default_total_volume: float = 1_000_000.0
    default_spot_price: float = 100.0

    # Real-price simulation
    simulation_volatility: float = 0.3
    simulation_drift: float = 0.01
    simulation_num_paths: int = 1000  # carried in snapshots, not used by the walk
    simulation_seed: int | None = None

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_dir: str = "logs"
    log_file: str = "hedgecalc.log"
