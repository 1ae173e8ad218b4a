"""Base32 alphabet checks used to vet TOTP secrets.

Only validation lives here; decoding the secret is left to pyotp.
"""

ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")

# Number of "=" characters RFC 4648 allows at the end of a full 8-char block.
VALID_PADDING_LENGTHS = (1, 3, 4, 6)


def is_base32(text: str) -> bool:
    """Check that text, minus trailing padding, is non-empty Base32.

    Lower-case letters are accepted; authenticator apps commonly emit them.
    """
    data = text.rstrip("=")
    if not data:
        return False
    return all(char in ALPHABET for char in data.upper())


def has_invalid_padding(text: str) -> bool:
    """Check whether "=" padding appears anywhere other than a legal tail.

    Unpadded text is always fine. Padded text must be a whole number of
    8-character blocks with an RFC 4648 padding length.
    """
    first = text.find("=")
    if first == -1:
        return False

    padding = text[first:]
    if padding.strip("="):
        return True

    if len(text) % 8 != 0:
        return True

    return len(padding) not in VALID_PADDING_LENGTHS
