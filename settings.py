import os
from dataclasses import dataclass

from calculator_state import DEFAULT_FUNDED_VOLUME
from input_parsing import parse_number


@dataclass
class Settings:
    APP_TITLE: str = os.getenv("APP_TITLE", "Take Rate & Lender Yield Modeler")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    DEFAULT_FUNDED_VOLUME: float = parse_number(os.getenv("DEFAULT_FUNDED_VOLUME"), DEFAULT_FUNDED_VOLUME)


settings = Settings()
