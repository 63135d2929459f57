"""Pytest fixtures for novelapy tests."""
import base64
import io

import pytest
from unittest.mock import AsyncMock
from Crypto.Random import get_random_bytes
from PIL import Image

from novelapy.core.api import ContentMeta


def make_image(width: int, height: int, fmt: str = 'PNG') -> bytes:
    """Encodes a solid-color image of the given size."""
    buffer = io.BytesIO()
    Image.new('RGB', (width, height), (200, 30, 90)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """A 300x200 PNG image."""
    return make_image(300, 200)


@pytest.fixture
def jpeg_bytes():
    """A 64x128 JPEG image."""
    return make_image(64, 128, 'JPEG')


@pytest.fixture
def png_data_uri(png_bytes):
    """The PNG fixture as a data URI."""
    return 'data:image/png;base64,' + base64.b64encode(png_bytes).decode()


@pytest.fixture
def random_password():
    """A random 24-character password."""
    return get_random_bytes(12).hex()


@pytest.fixture
def credentials():
    """Sample account credentials."""
    return {'email': 'artist@example.com', 'password': 'correct horse battery'}


@pytest.fixture
def mock_transport():
    """Transport double with async HTTP methods."""
    transport = AsyncMock()
    transport.head_meta = AsyncMock(return_value=ContentMeta(1024, 'application/octet-stream'))
    transport.get = AsyncMock(return_value=b'body')
    transport.get_json = AsyncMock(return_value={})
    transport.post_json = AsyncMock(return_value={})
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def sample_subscription():
    """Returns a sample /user/subscription payload."""
    return {
        'tier': 3,
        'active': True,
        'expiresAt': 1699900000,
        'perks': {
            'maxPriorityActions': 1000,
            'startPriority': 10,
            'contextTokens': 8192,
            'moduleTrainingSteps': 10000,
            'unlimitedMaxPriority': True,
            'voiceGeneration': True,
            'imageGeneration': True,
            'unlimitedImageGeneration': True,
            'unlimitedImageGenerationLimits': [
                {'resolution': 4194304, 'maxPrompts': 0},
                {'resolution': 1048576, 'maxPrompts': 1},
            ],
        },
        'paymentProcessorData': {
            'c': 'USD', 'n': 1, 'o': 'order', 'p': 2500,
            'r': 'renew', 's': 'active', 't': 1699900000, 'u': 'user',
        },
        'trainingStepsLeft': {
            'fixedTrainingStepsLeft': 9000,
            'purchasedTrainingSteps': 0,
        },
    }
