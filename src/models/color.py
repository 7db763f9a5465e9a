"""Color types for overlay fill expressions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "RGB":
        """Parse '#rrggbb' (leading '#' optional)."""
        value = value.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected a 6-digit hex color, got {value!r}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def rgba(self, alpha: int = 190) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, alpha)


@dataclass(frozen=True)
class ColorScaleDomain:
    min: float
    max: float
    low_color: RGB
    high_color: RGB
    neutral_color: RGB

    def __post_init__(self) -> None:
        if self.max <= self.min:
            raise ValueError(
                f"Color domain max ({self.max}) must be greater than min ({self.min})"
            )
