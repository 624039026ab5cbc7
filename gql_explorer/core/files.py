"""Reading and writing ``.gql`` operation files.

An exported file may start with a ``#authToken: <token>`` comment line so
it can be replayed later with an automatic login.
"""

import re
from pathlib import Path

from .errors import OperationFileError
from .models import OperationKind

AUTH_TOKEN_PATTERN = re.compile(r"^#authToken:\s*(\S+)\s*$", re.MULTILINE)
_KIND_PATTERN = re.compile(r"query|mutation")


def extract_auth_token(text: str) -> str | None:
    """Return the token of a ``#authToken:`` comment line, if any."""
    match = AUTH_TOKEN_PATTERN.search(text)
    return match.group(1) if match else None


def detect_kind(text: str) -> OperationKind:
    """Classify a document by whichever keyword appears first.

    Raises:
        OperationFileError: If neither ``query`` nor ``mutation`` occurs
    """
    match = _KIND_PATTERN.search(AUTH_TOKEN_PATTERN.sub("", text))
    if match is None:
        raise OperationFileError("Unknown operation kind: expected a query or a mutation")
    return OperationKind(match.group(0))


def export_operation(text: str, name: str, directory: Path, auth_token: str | None = None) -> Path:
    """Write ``<name>.gql`` into ``directory``, optionally with the token comment."""
    path = Path(directory) / f"{name}.gql"
    if auth_token:
        text = f"#authToken: {auth_token}\n{text}"
    path.write_text(text, encoding="utf-8")
    return path
