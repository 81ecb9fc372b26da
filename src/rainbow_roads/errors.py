"""Errors raised while preparing or rendering an animation."""


class RenderError(ValueError):
    """Base class for invalid rendering input."""
    pass


class InvalidBoundsError(RenderError):
    """Raised when the input points do not span an area that can be projected."""
    pass


class EmptyInputError(RenderError):
    """Raised when there are no activities, or an activity has no points."""
    pass


class CanvasSizeError(RenderError):
    """Raised when the canvas width or frame count is not positive."""
    pass


class FrameSequenceError(RenderError):
    """Raised when a frame sequence is handed to the delta optimizer twice."""
    pass
