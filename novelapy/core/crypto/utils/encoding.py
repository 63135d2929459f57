"""Encoding utilities."""
import base64


class Base64Encoder:
    """
    Base64 helpers.

    encode() produces the URL-safe alphabet without padding, matching the
    default output of libsodium's base64 helpers.
    """

    @staticmethod
    def encode(data: bytes) -> str:
        """Encodes bytes to Base64 URL-safe without padding."""
        return base64.urlsafe_b64encode(data).decode('ascii').rstrip('=')

    @staticmethod
    def decode_standard(data: str) -> bytes:
        """
        Decodes standard Base64 as found in data URIs.

        Whitespace is ignored; any other character outside the alphabet
        raises binascii.Error.
        """
        data = ''.join(data.split())
        padding = len(data) % 4
        if padding:
            data += '=' * (4 - padding)
        return base64.b64decode(data, validate=True)
