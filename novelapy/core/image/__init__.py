"""Image size helpers."""
from .size import Size, MAX_OUTPUT_SIZE, SIZE_MULTIPLE, closest_multiple, resize_input, fit
from .probe import probe_size, probe_format

__all__ = [
    'Size',
    'MAX_OUTPUT_SIZE',
    'SIZE_MULTIPLE',
    'closest_multiple',
    'resize_input',
    'fit',
    'probe_size',
    'probe_format',
]
