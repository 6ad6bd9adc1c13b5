import os


def parse_alpha(raw) -> float:
    """Parse a significance threshold, which must lie strictly between 0 and 1."""
    try:
        alpha = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"alpha must be a number, got {raw!r}") from e
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be between 0 and 1, got {alpha}")
    return alpha


# Significance threshold shared by every test (can be overridden via environment variable)
try:
    DEFAULT_ALPHA = parse_alpha(os.getenv("FINCH_BEAKS_ALPHA", "0.05"))
except ValueError as e:
    raise ValueError(f"Invalid FINCH_BEAKS_ALPHA: {e}") from e
