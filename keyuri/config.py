import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    log_level: str
    max_qr_upload_bytes: int


def load_settings() -> Settings:
    load_dotenv()

    log_level = os.getenv("LOG_LEVEL", "INFO")
    max_qr_upload_bytes = os.getenv("MAX_QR_UPLOAD_BYTES", "5242880")

    if not max_qr_upload_bytes.isdigit():
        raise RuntimeError("MAX_QR_UPLOAD_BYTES must be a whole number of bytes")

    return Settings(
        log_level=log_level,
        max_qr_upload_bytes=int(max_qr_upload_bytes),
    )
