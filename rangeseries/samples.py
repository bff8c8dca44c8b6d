"""
I/Q sample arrays using NumPy.

Sample blocks (``afft``, ``ifft``) carry a variable number of
{float32 I, float32 Q} pairs; the count is ``byte_size // 8``. The payload
is held as a NumPy array of shape (n, 2) in host order.

Text Format:
    One line per sample: zero-based index, I and Q as signed decimals.
    Example: "  0  1.000000000e+00 -2.500000000e-01"
"""
from typing import TypeAlias, Annotated, List

import numpy as np

SAMPLE_SIZE = 8
"""Bytes per I/Q pair on the wire."""

SamplesType: TypeAlias = Annotated[np.ndarray, "float32 array of shape (n, 2): I, Q"]


def sample_dtype(endianness: str = '>') -> np.dtype:
    return np.dtype(f'{endianness}f4')


def unpack_samples(raw: bytes, endianness: str = '>') -> SamplesType:
    """
    Decode wire bytes into an (n, 2) float32 array.

    Trailing bytes that do not complete a pair are ignored.

    Examples:
        >>> unpack_samples(bytes.fromhex("3f800000 c0000000".replace(" ", "")))
        array([[ 1., -2.]], dtype=float32)
    """
    count = len(raw) // SAMPLE_SIZE
    values = np.frombuffer(raw, dtype=sample_dtype(endianness), count=count * 2)
    return values.astype(np.float32).reshape(count, 2)


def pack_samples(samples: SamplesType, endianness: str = '>') -> bytes:
    """Encode an (n, 2) array of I/Q values to wire bytes."""
    return np.asarray(samples, dtype=np.float32).astype(sample_dtype(endianness)).tobytes()


def format_sample(index: int, i_value, q_value) -> str:
    """9 significant digits are enough to read a float32 back exactly."""
    return "%3d % .9e % .9e" % (index, float(i_value), float(q_value))


def render_samples(samples: SamplesType) -> List[str]:
    return [format_sample(index, i_value, q_value)
            for index, (i_value, q_value) in enumerate(samples)]


def parse_sample_line(line: str) -> tuple:
    """
    Read one sample line into (index, I, Q).

    Raises:
        ValueError: if the line does not hold an integer and two numbers.
    """
    fields = line.split()
    if len(fields) != 3:
        raise ValueError(f"expected 'index I Q', got {line!r}")
    return int(fields[0]), float(fields[1]), float(fields[2])


def samples_from_values(values: List[tuple]) -> SamplesType:
    """Build the payload array from (I, Q) pairs, narrowing to float32."""
    if not values:
        return np.zeros((0, 2), dtype=np.float32)
    return np.array(values, dtype=np.float64).astype(np.float32).reshape(len(values), 2)
