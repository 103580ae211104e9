"""Exceptions raised by the codecs."""


class CodecError(ValueError):
    """Base class for codec input errors.

    Codec errors are raised before any output is built, so a failed call
    never yields partial data.
    """


class MalformedInput(CodecError):
    """Raised when hex text cannot be decoded.

    Attributes:
        text: The text being decoded.
        index: Position of the offending character.
        found: The offending character, or None at end of input.
        expected: Description of what was expected at that position.
    """

    def __init__(self, message: str, text: str, index: int, found: str | None, expected: str) -> None:
        super().__init__(f"{message} at index {index}")
        self.text = text
        self.index = index
        self.found = found
        self.expected = expected

    def caret_snippet(self, context: int = 10) -> str:
        """Render the input around the error with a caret under it."""
        start = max(0, self.index - context)
        end = min(len(self.text), self.index + context)
        return f"{self.text[start:end]}\n{' ' * (self.index - start)}^"


class ParameterOutOfRange(CodecError):
    """Raised when a raster command parameter is outside protocol bounds."""

    def __init__(self, name: str, value: int, minimum: int, maximum: int) -> None:
        super().__init__(f"{name}={value} is out of range [{minimum}, {maximum}]")
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class InvalidDimensions(CodecError):
    """Raised when a pixel buffer does not match its declared dimensions."""

    def __init__(self, length: int, width: int, height: int, channels: int) -> None:
        super().__init__(
            f"pixel buffer length ({length}) != width*height*{channels} "
            f"({width}*{height}*{channels} = {width * height * channels})"
        )
        self.length = length
        self.width = width
        self.height = height
        self.channels = channels
