"""Errors raised by the listing and export pipeline.

Filesystem failures are not wrapped: OSError from directory creation or file
writes reaches the caller unchanged.
"""

from enum import StrEnum


class MistErrorKind(StrEnum):
    MISSING_EXPORT_PATH = "missing_export_path"
    INVALID_EXPORT_FILE_EXTENSION = "invalid_export_file_extension"
    INVALID_DATA = "invalid_data"


_DESCRIPTIONS: dict[MistErrorKind, str] = {
    MistErrorKind.MISSING_EXPORT_PATH: "Missing export path",
    MistErrorKind.INVALID_EXPORT_FILE_EXTENSION: (
        "Export file extension is invalid, supported extensions: csv, json, plist, yaml"
    ),
    MistErrorKind.INVALID_DATA: "Invalid data, unable to encode export as UTF-8 text",
}


class MistError(Exception):
    """Listing or export failure, identified by its kind.

    Attributes:
        kind: Which failure occurred
        detail: Optional context appended to the description (e.g. the offending path)
    """

    def __init__(self, kind: MistErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(self.description)

    @property
    def description(self) -> str:
        description = _DESCRIPTIONS[self.kind]
        if self.detail:
            return f"{description}: {self.detail}"
        return description
