"""Per-call options for the codecs."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

# Characters skipped between hex digits (in addition to whitespace)
DEFAULT_DELIMITERS = ",;:_-|./\\"


class OddNibblePolicy(StrEnum):
    """What to do with a lone trailing nibble."""

    PAD_RIGHT = "pad-right"  # "ABC" -> AB C0
    PAD_LEFT = "pad-left"  # "ABC" -> 0A BC
    REJECT = "reject"


class HexDecodeOptions(BaseModel):
    """Options for decoding loosely formatted hex text."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_0x_prefix: bool = True
    strict: bool = True
    delimiters: str = DEFAULT_DELIMITERS
    skip_whitespace: bool = True
    odd_nibble_policy: OddNibblePolicy = OddNibblePolicy.PAD_RIGHT

    def is_delimiter(self, char: str) -> bool:
        """Check if a character is skipped without affecting nibble state."""
        return (self.skip_whitespace and char.isspace()) or char in self.delimiters


class RasterOptions(BaseModel):
    """Scale factors for ESC/POS raster graphics."""

    x_scale: Literal[1, 2] = 1
    y_scale: Literal[1, 2] = 1
