"""Runtime configuration.

Values come from ``GSTBILL_*`` environment variables or a ``.env`` file
in the working directory; the defaults describe a single Gujarat shop.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gstbill.domain.model.company import CompanyProfile

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
ROOT_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Configuration for the billing application."""

    # Storage
    DATA_DIR: Path = ROOT_DIR / "data"
    DOCUMENTS_DIR: Path = ROOT_DIR / "data" / "invoices"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Catalog import
    IMPORT_CHUNK_SIZE: int = Field(default=2000, gt=0)
    IMPORT_YIELD_DELAY: float = Field(default=0.01, ge=0)

    # Invoice numbering
    INVOICE_PREFIX: str = "INV-"
    INVOICE_NUMBER_BASE: int = 1001

    # Letterhead
    COMPANY_NAME: str = "Gopi Distributors"
    COMPANY_ADDRESS: str = "123 Market Road, Trading Complex"
    COMPANY_CITY: str = "Ahmedabad"
    COMPANY_STATE: str = "Gujarat"
    COMPANY_PINCODE: str = "380001"
    COMPANY_PHONE: str = "+91 98765 43210"
    COMPANY_GSTIN: str = "24ABCDE1234F1Z5"

    model_config = SettingsConfigDict(
        env_prefix="GSTBILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def company(self) -> CompanyProfile:
        return CompanyProfile(
            name=self.COMPANY_NAME,
            address=self.COMPANY_ADDRESS,
            city=self.COMPANY_CITY,
            state=self.COMPANY_STATE,
            pincode=self.COMPANY_PINCODE,
            phone=self.COMPANY_PHONE,
            gstin=self.COMPANY_GSTIN,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
