"""
Cost estimate for one linear solve.

Factorization is O(n^3) and substitution O(n^2 k), so one solve costs
about n^2 (n + k). The value only steers how finely the batch driver
splits work across threads; it never affects results.
"""

# Above this many rows the product is not computed at all
COST_CLAMP_ROWS = 1 << 20

# Signed 32-bit maximum, returned instead of the product for huge matrices
COST_SENTINEL = 2**31 - 1


def cost_per_unit(rows: int, rhss: int) -> int:
    """
    Estimated cost of solving one (rows x rows) system with rhss columns.

    Returns rows**2 * (rows + rhss), or COST_SENTINEL when rows exceeds
    COST_CLAMP_ROWS so consumers sized for 32/64-bit costs never see a
    wrapped value.

    Raises:
        ValueError: If rows or rhss is negative
    """
    if rows < 0 or rhss < 0:
        raise ValueError(f"rows and rhss must be non-negative, got {rows}, {rhss}")
    if rows > COST_CLAMP_ROWS:
        return COST_SENTINEL
    return rows * rows * (rows + rhss)
