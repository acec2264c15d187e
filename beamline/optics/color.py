from __future__ import annotations

GAMMA = 0.8


def wavelength_to_rgb(wavelength: float) -> str:
    """Approximate display colour of a visible wavelength (nm) as ``"rgb(r, g, b)"``.

    Wavelengths outside 380-750 nm map to black.
    """
    w = float(wavelength)
    r = g = b = 0.0

    if 380 <= w < 440:
        r, b = -(w - 440) / (440 - 380), 1.0
    elif 440 <= w < 490:
        g, b = (w - 440) / (490 - 440), 1.0
    elif 490 <= w < 510:
        g, b = 1.0, -(w - 510) / (510 - 490)
    elif 510 <= w < 580:
        r, g = (w - 510) / (580 - 510), 1.0
    elif 580 <= w < 645:
        r, g = 1.0, -(w - 645) / (645 - 580)
    elif 645 <= w <= 750:
        r = 1.0

    # Intensity falls off towards the edges of vision.
    if 380 <= w < 420:
        factor = 0.3 + 0.7 * (w - 380) / (420 - 380)
    elif 420 <= w <= 700:
        factor = 1.0
    elif 700 < w <= 750:
        factor = 0.3 + 0.7 * (750 - w) / (750 - 700)
    else:
        factor = 0.0

    def adjust(c: float) -> int:
        return int(round(255 * (c * factor) ** GAMMA))

    return f"rgb({adjust(r)}, {adjust(g)}, {adjust(b)})"
