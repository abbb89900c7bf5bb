"""Error kinds raised by the pipeline stages."""


class PipelineError(Exception):
    """Base class for every error the pipeline reports."""


class ConfigurationError(PipelineError):
    """Invalid or missing settings, detected before any work starts."""


class InputError(PipelineError):
    """Input text is missing, unreadable or blank."""


class SynthesisError(PipelineError):
    """The speech service failed for one chunk."""

    def __init__(self, index: int, cause: BaseException):
        self.index = index
        self.cause = cause
        super().__init__(f"Synthesis failed for chunk {index}: {cause}")


class AudioProcessingError(PipelineError):
    """ffmpeg failed while rendering silence or merging chunks."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        detail = f"{message} (exit status {returncode})" if returncode is not None else message
        if stderr:
            detail = f"{detail}: {stderr}"
        super().__init__(detail)


class FilesystemError(PipelineError):
    """Best-effort filesystem step failed. Logged, never raised."""


class OutputError(PipelineError):
    """The workspace or the destination file could not be written."""
