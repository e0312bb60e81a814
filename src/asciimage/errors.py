class ConversionError(Exception):
    """Base class for everything the conversion pipeline raises."""


class ConfigError(ConversionError):
    """Invalid options: bad ramp, dimensions, threshold or conflicting flags."""


class InputError(ConversionError):
    """Source could not be read, decoded, or is empty."""


class ResourceError(ConversionError):
    """A font face is missing or unusable for the requested rendering."""


class FrameError(ConversionError):
    """Failure while converting one frame of an animated source.

    ``frame_number`` is 1-based.
    """

    def __init__(self, frame_number: int, message: str):
        super().__init__(f"frame {frame_number}: {message}")
        self.frame_number = frame_number
