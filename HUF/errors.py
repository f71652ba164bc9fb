class HuffmanError(ValueError):
    """Base class for codec failures."""


class EmptyInputError(HuffmanError):
    """Encode was given a zero-length buffer."""


class CorruptContainerError(HuffmanError):
    """Container bytes are structurally inconsistent."""


class InputTooLargeError(HuffmanError):
    """Encoded bit count or a frequency does not fit the container's int32 fields."""
