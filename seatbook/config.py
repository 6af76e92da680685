import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class PaymentDetails:
    bank_name: str = "BCA"
    bank_account_number: str = ""
    bank_account_name: str = ""
    cash_contacts: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "PaymentDetails":
        contacts = tuple(x.strip() for x in os.getenv("CASH_CONTACTS", "").split(";") if x.strip())
        return cls(
            bank_name=os.getenv("BANK_NAME", "BCA").strip() or "BCA",
            bank_account_number=os.getenv("BANK_ACCOUNT_NUMBER", "").strip(),
            bank_account_name=os.getenv("BANK_ACCOUNT_NAME", "").strip(),
            cash_contacts=contacts,
        )


@dataclass(frozen=True)
class Config:
    backend_url: str
    backend_timeout: float
    host: str
    port: int
    reload: bool
    log_level: str
    payment: PaymentDetails = field(default_factory=PaymentDetails)

    @classmethod
    def load(cls) -> "Config":
        load_dotenv()
        backend_url = os.getenv("BACKEND_URL", "").strip().rstrip("/") or "http://localhost:8080"
        try:
            backend_timeout = float(os.getenv("BACKEND_TIMEOUT") or "12")
        except ValueError as exc:
            raise RuntimeError("BACKEND_TIMEOUT must be a number of seconds") from exc
        if backend_timeout <= 0:
            raise RuntimeError("BACKEND_TIMEOUT must be positive")
        host = os.getenv("FRONTEND_HOST", "0.0.0.0")
        try:
            port = int(os.getenv("PORT") or os.getenv("FRONTEND_PORT") or "8000")
        except ValueError as exc:
            raise RuntimeError("PORT must be an integer") from exc
        reload_enabled = os.getenv("FRONTEND_RELOAD", "0") == "1"
        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        return cls(
            backend_url=backend_url,
            backend_timeout=backend_timeout,
            host=host,
            port=port,
            reload=reload_enabled,
            log_level=log_level,
            payment=PaymentDetails.from_env(),
        )
