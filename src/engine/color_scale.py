"""Value -> color mapping along bounded two-stop gradients.

The mapper is direction-agnostic: each domain already orients low_color and
high_color so that the "bad" end of its dataset lands on the warning color.

Pure functions. No I/O.
"""

from src.engine.numeric import round_half_up
from src.models.color import ColorScaleDomain, RGB

NEUTRAL_GRAY = RGB.from_hex("#9E9E9E")

RED = RGB.from_hex("#F44336")
GREEN = RGB.from_hex("#4CAF50")
BLUE = RGB.from_hex("#2196F3")
SLATE = RGB.from_hex("#B0BEC8")
PURPLE = RGB.from_hex("#6A1B9A")

# Median household income: low income is the bad end
INCOME_DOMAIN = ColorScaleDomain(
    min=2_000, max=120_000, low_color=RED, high_color=GREEN, neutral_color=NEUTRAL_GRAY,
)

# Health risk index (0-1): high risk is the bad end
HEALTH_DOMAIN = ColorScaleDomain(
    min=0, max=1, low_color=GREEN, high_color=RED, neutral_color=NEUTRAL_GRAY,
)

# Environmental burden (0-100): high burden is the bad end
ENVIRONMENT_DOMAIN = ColorScaleDomain(
    min=0, max=100, low_color=BLUE, high_color=RED, neutral_color=NEUTRAL_GRAY,
)

# Average assessed value: low value is the bad end
VALUE_DOMAIN = ColorScaleDomain(
    min=50_000, max=300_000, low_color=RED, high_color=GREEN, neutral_color=NEUTRAL_GRAY,
)

# Percent Black population: high share marks persisting segregation
RACE_DOMAIN = ColorScaleDomain(
    min=0, max=80, low_color=SLATE, high_color=PURPLE, neutral_color=NEUTRAL_GRAY,
)


def _lerp(a: int, b: int, t: float) -> int:
    return round_half_up(a + (b - a) * t)


def color_for(value: float | None, domain: ColorScaleDomain) -> RGB:
    """Interpolate a value's color; None maps to the domain's neutral color."""
    if value is None:
        return domain.neutral_color

    clamped = max(domain.min, min(domain.max, value))
    t = (clamped - domain.min) / (domain.max - domain.min)

    low, high = domain.low_color, domain.high_color
    return RGB(
        r=_lerp(low.r, high.r, t),
        g=_lerp(low.g, high.g, t),
        b=_lerp(low.b, high.b, t),
    )


def hex_for(value: float | None, domain: ColorScaleDomain) -> str:
    return color_for(value, domain).hex


def rgba_for(
    value: float | None,
    domain: ColorScaleDomain,
    alpha: int = 190,
) -> tuple[int, int, int, int]:
    return color_for(value, domain).rgba(alpha)
