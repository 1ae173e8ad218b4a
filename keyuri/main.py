import logging

from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.responses import JSONResponse, Response

from keyuri.config import load_settings
from keyuri.errors import KeyUriError
from keyuri.legacy import load_legacy_settings
from keyuri.logging_config import configure_logging
from keyuri.models import (
    KeyUri,
    KeyUriParseRequest,
    KeyUriResponse,
    LegacySettingsRequest,
    OTPResponse,
    OTPVerifyRequest,
    OTPVerifyResponse,
)
from keyuri.otp import generate_code, verify_code
from keyuri.qr import parse_qr_image, render_qr_image
from keyuri.uri import load_key_uri, serialize_key_uri

settings = load_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="KeyUri-Helper API",
    description="Local REST API for validating and converting TOTP key URIs",
    version="1.0.0",
)


@app.exception_handler(KeyUriError)
async def key_uri_error_handler(request, exc):
    """Handle rejected key URIs and legacy records."""
    logger.warning("Rejected input on %s: %s", request.url.path, exc.kind.value)
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "error": exc.kind.value},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc):
    """Handle ValueError exceptions."""
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )


def _to_response(key: KeyUri) -> KeyUriResponse:
    return KeyUriResponse(**key.model_dump(), uri=serialize_key_uri(key))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/key-uris/parse", response_model=KeyUriResponse)
async def parse_key_uri_endpoint(request: KeyUriParseRequest):
    """Validate a key URI and return its fields and canonical form.

    Raises:
        400: Invalid key URI
    """
    return _to_response(load_key_uri(request.uri))


@app.post("/key-uris/legacy", response_model=KeyUriResponse)
async def migrate_legacy_endpoint(request: LegacySettingsRequest):
    """Migrate a legacy settings record to a key URI.

    Raises:
        400: Invalid legacy record or resulting key URI
    """
    key = load_legacy_settings(request.settings, request.secret)
    logger.info("Migrated legacy settings for issuer %s", key.issuer)
    return _to_response(key)


@app.post("/key-uris/qr", response_model=KeyUriResponse)
async def parse_qr_endpoint(file: UploadFile = File(...)):
    """Read a key URI from an uploaded QR code image.

    Raises:
        400: Invalid image, no QR code or invalid key URI
        413: Image too large
    """
    image_bytes = await file.read()
    if len(image_bytes) > settings.max_qr_upload_bytes:
        raise HTTPException(status_code=413, detail="Image too large")

    return _to_response(parse_qr_image(image_bytes))


@app.post("/key-uris/qr-image")
async def render_qr_endpoint(request: KeyUriParseRequest):
    """Render the canonical form of a key URI as a PNG QR code.

    Raises:
        400: Invalid key URI
    """
    key = load_key_uri(request.uri)
    return Response(content=render_qr_image(key), media_type="image/png")


@app.post("/key-uris/otp", response_model=OTPResponse)
async def generate_otp_endpoint(request: KeyUriParseRequest):
    """Get the current code for a key URI.

    Raises:
        400: Invalid key URI or parameters codes cannot be made with
    """
    return generate_code(load_key_uri(request.uri))


@app.post("/key-uris/verify", response_model=OTPVerifyResponse)
async def verify_otp_endpoint(request: OTPVerifyRequest):
    """Verify a code against a key URI.

    Returns:
        Verification result (valid: true/false).
    """
    key = load_key_uri(request.uri)
    return {"valid": verify_code(key, request.code)}
