"""Tests for the exception hierarchy."""
import pytest

from novelapy.core.exceptions import (
    AuthError,
    CryptoInitError,
    InvalidDataURIError,
    KeyDerivationError,
    NovelAIException,
    TooLargeError,
    TransportError,
    UnsupportedTypeError,
)


class TestHierarchy:

    @pytest.mark.parametrize('cls', [
        UnsupportedTypeError, TooLargeError, InvalidDataURIError,
        TransportError, CryptoInitError, KeyDerivationError,
    ])
    def test_subclasses_base(self, cls):
        assert issubclass(cls, NovelAIException)

    def test_invalid_data_uri_is_value_error(self):
        assert issubclass(InvalidDataURIError, ValueError)

    def test_transport_error_fields(self):
        error = TransportError("boom", status_code=502, url='https://x.test')

        assert error.status_code == 502
        assert error.url == 'https://x.test'
        assert str(error) == "boom"


class TestAuthErrorCatch:
    """Test suite for AuthError.catch."""

    def test_mapped_status_translated(self):
        with pytest.raises(AuthError) as exc_info:
            with AuthError.catch({401: '.invalid-token'}):
                raise TransportError("unauthorized", status_code=401)

        assert str(exc_info.value) == '.invalid-token'
        assert exc_info.value.code == 401

    def test_unmapped_status_passes_through(self):
        with pytest.raises(TransportError) as exc_info:
            with AuthError.catch({401: '.invalid-token'}):
                raise TransportError("forbidden", status_code=403)

        assert exc_info.value.status_code == 403

    def test_network_error_passes_through(self):
        with pytest.raises(TransportError):
            with AuthError.catch({401: '.invalid-token'}):
                raise TransportError("connection reset")

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with AuthError.catch({401: '.invalid-token'}):
                raise KeyError('accessToken')

    def test_no_error(self):
        with AuthError.catch({401: '.invalid-token'}):
            value = 1

        assert value == 1
