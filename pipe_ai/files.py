import os

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import NotFoundError, UnsupportedKindError

APP_NAME = "pipe-ai"


@dataclass(frozen=True)
class FileKind:
    name: str
    label: str
    user_dir: str
    install_dir: str
    extension: str


@dataclass(frozen=True)
class ResolvedFile:
    identifier: str
    kind: str
    path: str


def user_config_dir() -> str:
    """The per-user directory, `~/.config/pipe-ai`."""
    return os.path.join(os.path.expanduser("~"), ".config", APP_NAME)


def install_dir() -> str:
    """The directory shipped with the package holding the stock config and prompts."""
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def file_kinds() -> Dict[str, FileKind]:
    user_root = user_config_dir()
    install_root = install_dir()
    return {
        "config": FileKind(
            name="config",
            label="configuration",
            user_dir=user_root,
            install_dir=os.path.join(install_root, "config"),
            extension=".yaml",
        ),
        "prompt": FileKind(
            name="prompt",
            label="prompt",
            user_dir=os.path.join(user_root, "prompts"),
            install_dir=os.path.join(install_root, "prompts"),
            extension=".txt",
        ),
    }


def locate_file(identifier: str, kind: str) -> ResolvedFile:
    """
    Finds the file a logical identifier refers to.

    An identifier that is itself a path to a regular file is used as is. Otherwise
    `<identifier><extension>` is looked up in the user directory and then in the
    installation directory; the first regular file wins.

    Raises:
        UnsupportedKindError: `kind` is neither "config" nor "prompt".
        NotFoundError: no candidate exists. The message lists both directories.
    """
    kinds = file_kinds()
    file_kind: Optional[FileKind] = kinds.get(kind)
    if file_kind is None:
        raise UnsupportedKindError(kind)

    if identifier and os.path.isfile(identifier):
        return ResolvedFile(identifier, kind, os.path.abspath(identifier))

    file_name = f"{identifier}{file_kind.extension}"
    search_dirs = [file_kind.user_dir, file_kind.install_dir]
    for directory in search_dirs:
        candidate = os.path.join(directory, file_name)
        if os.path.isfile(candidate):
            return ResolvedFile(identifier, kind, candidate)

    raise NotFoundError(identifier, file_kind.label, search_dirs)


def resolve_file(identifier: str, kind: str) -> str:
    """Returns the content of the file `identifier` resolves to for the given kind."""
    resolved = locate_file(identifier, kind)
    with open(resolved.path, "r", encoding="utf-8") as f:
        return f.read()
