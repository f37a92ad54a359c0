"""
Conversion error hierarchy.

Every fatal path of a conversion raises a subclass of ConversionError so
callers can tell input problems from render or serialization failures.
"""


class ConversionError(Exception):
    """Base exception for conversion errors"""
    pass


class HtmlValidationError(ConversionError):
    """Input is not usable HTML (rejected before rendering)"""
    pass


class RenderError(ConversionError):
    """Browser navigation, evaluation or capture failed"""
    pass


class SerializationError(ConversionError):
    """Output container could not be written"""
    pass


class ConversionCancelled(ConversionError):
    """Cancellation was requested at a stage boundary"""
    pass
