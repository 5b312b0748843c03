"""
Error types raised by pipe-ai components.

Components only raise these; `ProcessLifecycle.run` is the one place that turns
them into a message on stderr and an exit status.
"""

from typing import List


class PipeAIError(Exception):
    """Base class for every error pipe-ai reports to the user."""


class ConfigurationError(PipeAIError):
    pass


class MissingProviderError(ConfigurationError):
    def __init__(self):
        super().__init__("The 'provider' key is missing from the configuration file.")


class FileResolutionError(PipeAIError):
    pass


class NotFoundError(FileResolutionError):
    def __init__(self, identifier: str, label: str, searched_dirs: List[str]):
        self.identifier = identifier
        self.searched_dirs = searched_dirs
        searched = "\n".join(f'"{d}"' for d in searched_dirs)
        super().__init__(
            f'Unable to find the {label} file "{identifier}".\n'
            f"Searched the following directories in order:\n{searched}"
        )


class UnsupportedKindError(FileResolutionError, ValueError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(
            f"Unsupported file type: '{kind}'. Supported types are 'config' and 'prompt'."
        )


class PromptAcquisitionError(PipeAIError):
    pass


class EmptyPromptError(PromptAcquisitionError):
    pass


class EmptyPayloadError(PromptAcquisitionError):
    def __init__(self):
        super().__init__(
            "Prompt cannot be empty. Provide one with -m, -p or -e, or type it when asked."
        )


class EditorLaunchError(PromptAcquisitionError):
    pass


class EditorExitError(PromptAcquisitionError):
    def __init__(self, editor: str, returncode: int):
        self.editor = editor
        self.returncode = returncode
        super().__init__(f"Editor '{editor}' exited with code {returncode}")


class TerminalUnavailableError(PromptAcquisitionError):
    pass


class ProviderError(PipeAIError):
    pass


class ProviderNotFoundError(ProviderError):
    def __init__(self, provider: str, available: List[str]):
        self.provider = provider
        self.available = available
        super().__init__(
            f"Provider module '{provider}' not found. "
            f"Available providers: {', '.join(available) or 'none'}."
        )


class ProviderRequestError(ProviderError):
    pass


class InputError(PipeAIError):
    pass


class SpeechError(PipeAIError):
    pass
