class PipelineError(Exception):
    """Base exception for pipeline failures."""


class PreconditionError(PipelineError):
    """Raised when the input or output path cannot be used."""


class ConversionError(PipelineError):
    """Raised when converting a GEDCOM file to XML fails."""
