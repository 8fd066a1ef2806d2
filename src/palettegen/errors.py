# errors.py

from __future__ import annotations


class PaletteError(ValueError):
    """Base class for errors raised by palettegen."""


class InvalidFormat(PaletteError):
    """A color string could not be parsed."""


class InvalidConfiguration(PaletteError):
    """Palette settings that cannot be generated from (e.g. color_count < 2)."""


class UnknownFormatter(PaletteError, KeyError):
    def __init__(self, fmt: str, supported: tuple[str, ...]) -> None:
        super().__init__(f"unknown format '{fmt}' (supported: {', '.join(supported)})")
        self.fmt = fmt
        self.supported = supported

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


__all__ = ["PaletteError", "InvalidFormat", "InvalidConfiguration", "UnknownFormatter"]
