import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.etherscan.io/v2/api"
MAINNET_CHAIN_ID = "1"
DEFAULT_OUTPUT_DIR = "./output"
DEFAULT_MAX_PROXY_HOPS = 10
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Config:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    chain_id: str = MAINNET_CHAIN_ID
    output_dir: str = DEFAULT_OUTPUT_DIR
    request_timeout: int = 10
    max_proxy_hops: int = DEFAULT_MAX_PROXY_HOPS
    log_level: str = "INFO"


def load_config(dotenv_path: str = ".env") -> Config:
    """Load configuration from a .env file and environment variables."""
    # Variables already present in the environment take precedence over .env.
    load_dotenv(dotenv_path, override=False)

    api_key = os.getenv("ETHERSCAN_API_KEY") or os.getenv("ETHERSCAN_APIKEY")
    if not api_key:
        raise ValueError("ETHERSCAN_API_KEY is required but not set.")

    base_url = os.getenv("ETHERSCAN_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
    output_dir = os.getenv("OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
    timeout = int(os.getenv("REQUEST_TIMEOUT", "10"))
    max_hops = int(os.getenv("MAX_PROXY_HOPS", str(DEFAULT_MAX_PROXY_HOPS)))
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    if max_hops < 0:
        raise ValueError("MAX_PROXY_HOPS must be a non-negative integer.")

    return Config(
        api_key=api_key.strip(),
        base_url=base_url,
        output_dir=output_dir,
        request_timeout=timeout,
        max_proxy_hops=max_hops,
        log_level=log_level,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
