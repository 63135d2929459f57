"""
Output size fitting.

The generation endpoint only accepts sizes whose dimensions are both
multiples of 64 and whose pixel count stays under MAX_OUTPUT_SIZE.
resize_input() maps any requested size onto such a size while keeping
the aspect ratio as close as possible.
"""
import math
from dataclasses import dataclass
from typing import Union

MAX_OUTPUT_SIZE = 1048576
SIZE_MULTIPLE = 64

Number = Union[int, float]


@dataclass(frozen=True)
class Size:
    """Image size in pixels."""
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_valid(self) -> bool:
        """True if the endpoint accepts this size unchanged."""
        return (
            self.width % SIZE_MULTIPLE == 0
            and self.height % SIZE_MULTIPLE == 0
            and self.area <= MAX_OUTPUT_SIZE
        )

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def _divide(a: Number, b: Number) -> float:
    """Float division with IEEE results for a zero divisor."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def closest_multiple(value: Number, mult: int) -> Number:
    """
    Round value to the nearest multiple of mult.

    Ties go to the lower multiple. NaN gives 0, and any other
    non-positive result is replaced by mult itself. Positive infinity
    is returned unchanged.

    Args:
        value: Value to round
        mult: Positive multiple

    Returns:
        Closest multiple of mult
    """
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return value if value > 0 else mult

    floor = math.floor(value / mult) * mult
    ceil = math.ceil(value / mult) * mult
    closest = floor if value - floor <= ceil - value else ceil

    return mult if closest <= 0 else closest


def resize_input(size: Size) -> Size:
    """
    Fit a requested size to the endpoint constraints.

    Args:
        size: Requested size

    Returns:
        Size with both dimensions multiples of 64 and at most
        MAX_OUTPUT_SIZE pixels
    """
    width, height = size.width, size.height
    if size.is_valid:
        return Size(width, height)

    # pin the shorter side at 512
    aspect_ratio = _divide(width, height)
    if aspect_ratio > 1:
        height = 512
        width = closest_multiple(height * aspect_ratio, SIZE_MULTIPLE)
    else:
        width = 512
        height = closest_multiple(_divide(width, aspect_ratio), SIZE_MULTIPLE)
    if width * height <= MAX_OUTPUT_SIZE:
        return Size(int(width), int(height))

    # pin the longer side at 1024
    if aspect_ratio > 1:
        width = 1024
        height = closest_multiple(_divide(width, aspect_ratio), SIZE_MULTIPLE)
    else:
        height = 1024
        width = closest_multiple(height * aspect_ratio, SIZE_MULTIPLE)
    return Size(int(width), int(height))


fit = resize_input
