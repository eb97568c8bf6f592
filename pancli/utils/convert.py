"""Size conversions between bytes and appliance gigabytes."""

BYTES_PER_GB = 1 << 30


def bytes_to_gb(size: int) -> float:
    """Convert a byte count to gigabytes (2^30 bytes)."""
    return size / BYTES_PER_GB


def gb_to_bytes(size: float) -> int:
    """Convert gigabytes to a byte count, truncating fractional bytes."""
    return int(size * BYTES_PER_GB)


def format_gb(size: int) -> str:
    """Render a byte count as gigabytes with two decimal digits.

    Example:
        >>> format_gb(1_610_612_736)
        '1.50'
    """
    return f"{bytes_to_gb(size):.2f}"
