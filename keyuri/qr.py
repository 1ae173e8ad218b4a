import logging
from io import BytesIO

import qrcode
from PIL import Image, UnidentifiedImageError
from pyzbar.pyzbar import decode

from keyuri.models import KeyUri
from keyuri.uri import load_key_uri, serialize_key_uri

logger = logging.getLogger(__name__)


def parse_qr_image(image_bytes: bytes) -> KeyUri:
    """Parse QR code image and validate the key URI it carries.

    Args:
        image_bytes: Image file bytes.

    Returns:
        Validated KeyUri.

    Raises:
        ValueError: If the image cannot be read or holds no QR code.
        KeyUriError: If the QR code text is not a valid key URI.
    """
    try:
        image = Image.open(BytesIO(image_bytes))
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Invalid image format: {str(e)}")

    qr_codes = decode(image)

    if not qr_codes:
        raise ValueError("No QR code found in image")

    if len(qr_codes) > 1:
        logger.debug("Image holds %d QR codes, using the first", len(qr_codes))

    qr_data = qr_codes[0].data.decode("utf-8")

    return load_key_uri(qr_data)


def render_qr_image(key: KeyUri) -> bytes:
    """Render the canonical key URI of a key as a PNG QR code.

    Args:
        key: Validated key URI.

    Returns:
        PNG image bytes.
    """
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=4,
    )
    qr.add_data(serialize_key_uri(key))
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
