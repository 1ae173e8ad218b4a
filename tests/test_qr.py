import pytest
from PIL import Image
from io import BytesIO
import qrcode
from pyzbar.pyzbar import decode

from keyuri.errors import ErrorKind, KeyUriError
from keyuri.models import Algorithm
from keyuri.qr import parse_qr_image, render_qr_image
from keyuri.uri import load_key_uri, serialize_key_uri


def create_qr_image(data: str) -> bytes:
    """Create a QR code image with the given data.

    Args:
        data: Data to encode in QR code.

    Returns:
        Image bytes.
    """
    qr = qrcode.QRCode(version=1, box_size=10, border=5)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    # Convert to bytes
    img_bytes = BytesIO()
    img.save(img_bytes, format='PNG')
    return img_bytes.getvalue()


def test_parse_totp_qr():
    """Test parsing TOTP QR code."""
    qr_data = "otpauth://totp/GitHub:user@example.com?secret=JBSWY3DPEBLW64TMMQ&issuer=GitHub&algorithm=SHA256&digits=8&period=30"
    image_bytes = create_qr_image(qr_data)

    key = parse_qr_image(image_bytes)

    assert key.secret == "JBSWY3DPEBLW64TMMQ"
    assert key.algorithm == Algorithm.SHA256
    assert key.digits == 8
    assert key.period == 30
    assert key.issuer == "GitHub"
    assert key.label == "user@example.com"


def test_parse_hotp_qr_rejected():
    """Test that HOTP QR codes are rejected."""
    qr_data = "otpauth://hotp/AWS:user@example.com?secret=JBSWY3DPEBLW64TMMQ&issuer=AWS&counter=0"
    image_bytes = create_qr_image(qr_data)

    with pytest.raises(KeyUriError) as exc_info:
        parse_qr_image(image_bytes)

    assert exc_info.value.kind == ErrorKind.INVALID_TYPE


def test_parse_qr_invalid_image():
    """Test parsing invalid image."""
    invalid_bytes = b"not an image"

    with pytest.raises(ValueError, match="Invalid image format"):
        parse_qr_image(invalid_bytes)


def test_parse_qr_no_qr_code():
    """Test parsing image without QR code."""
    # Create a blank image
    img = Image.new('RGB', (100, 100), color='white')
    img_bytes = BytesIO()
    img.save(img_bytes, format='PNG')

    with pytest.raises(ValueError, match="No QR code found"):
        parse_qr_image(img_bytes.getvalue())


def test_parse_qr_invalid_uri():
    """Test parsing QR code with non-otpauth URI."""
    image_bytes = create_qr_image("https://example.com")

    with pytest.raises(KeyUriError) as exc_info:
        parse_qr_image(image_bytes)

    assert exc_info.value.kind == ErrorKind.INVALID_SCHEME


def test_render_qr_image():
    """Test that the rendered QR code holds the canonical key URI."""
    key = load_key_uri("otpauth://totp/Example:alice?secret=JBSWY3DPEHPK3PXP&period=60")

    png = render_qr_image(key)

    assert png.startswith(b"\x89PNG")
    decoded = decode(Image.open(BytesIO(png)))
    assert decoded[0].data.decode("utf-8") == serialize_key_uri(key)
    assert parse_qr_image(png) == key
