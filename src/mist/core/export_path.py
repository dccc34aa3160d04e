"""Validation of export paths.

Runs before any catalog retrieval so that a mistyped path fails immediately
instead of after a slow network round trip.
"""

from pathlib import PurePath

from mist.core.errors import MistError, MistErrorKind

SUPPORTED_EXTENSIONS: tuple[str, ...] = ("csv", "json", "plist", "yaml")


def export_extension(export_path: str) -> str:
    """Return the text after the last "." of the path's final component.

    Returns an empty string when the final component has no ".".

    Examples:
        >>> export_extension("exports/list.csv")
        'csv'
        >>> export_extension("list.tar.yaml")
        'yaml'
        >>> export_extension("list")
        ''
    """
    name = PurePath(export_path).name
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def validate_export_path(export_path: str | None) -> None:
    """Check an optional export path before any work is done.

    Args:
        export_path: Path given on the command line, or None if no export was requested

    Raises:
        MistError: MISSING_EXPORT_PATH if the path is empty,
            INVALID_EXPORT_FILE_EXTENSION if the extension is not exactly one of
            csv, json, plist or yaml (matched case-sensitively)
    """
    if export_path is None:
        return

    if not export_path:
        raise MistError(MistErrorKind.MISSING_EXPORT_PATH)

    if export_extension(export_path) not in SUPPORTED_EXTENSIONS:
        raise MistError(MistErrorKind.INVALID_EXPORT_FILE_EXTENSION, export_path)
