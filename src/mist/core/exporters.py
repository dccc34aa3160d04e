"""Export of catalog records to CSV, JSON, property list and YAML files.

Each record kind has a strict pydantic model describing its export mapping.
The models are dumped in JSON mode, so every format sees the same keys and
values:

    firmware: signed, name, version, build, date, url, checksum
    product:  identifier, name, version, build, date, distribution_url

`signed` stays a boolean; `date` becomes an ISO "YYYY-MM-DD" string. CSV keeps
only the five displayed columns and writes booleans as "true"/"false".
"""

import csv
import datetime
import io
import json
import plistlib
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from mist.cli.output import output_step
from mist.core.catalog.types import FirmwareRecord, ProductRecord
from mist.core.errors import MistError, MistErrorKind
from mist.core.export_path import export_extension

RecordKind = Literal["firmware", "product"]

# (CSV header, export mapping key) per column, in output order
CSV_COLUMNS: dict[RecordKind, tuple[tuple[str, str], ...]] = {
    "firmware": (
        ("Signed", "signed"),
        ("Name", "name"),
        ("Version", "version"),
        ("Build", "build"),
        ("Date", "date"),
    ),
    "product": (
        ("Identifier", "identifier"),
        ("Name", "name"),
        ("Version", "version"),
        ("Build", "build"),
        ("Date", "date"),
    ),
}

FORMAT_LABELS: dict[str, str] = {
    "csv": "CSV",
    "json": "JSON",
    "plist": "Property List",
    "yaml": "YAML",
}


class FirmwareExport(BaseModel):
    """Export mapping for a firmware record."""

    model_config = ConfigDict(strict=True, frozen=True)

    signed: bool
    name: str
    version: str
    build: str
    date: datetime.date
    url: str
    checksum: str

    @classmethod
    def from_record(cls, record: FirmwareRecord) -> "FirmwareExport":
        return cls(
            signed=record.signed,
            name=record.name,
            version=record.version,
            build=record.build,
            date=record.date,
            url=record.url,
            checksum=record.checksum,
        )


class ProductExport(BaseModel):
    """Export mapping for an installer product record."""

    model_config = ConfigDict(strict=True, frozen=True)

    identifier: str
    name: str
    version: str
    build: str
    date: datetime.date
    distribution_url: str

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductExport":
        return cls(
            identifier=record.identifier,
            name=record.name,
            version=record.version,
            build=record.build,
            date=record.date,
            distribution_url=record.distribution_url,
        )


def _to_utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e


def _csv_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_csv(kind: RecordKind, mappings: list[dict[str, Any]]) -> bytes:
    """Encode mappings as a header line plus one comma-separated line per record."""
    columns = CSV_COLUMNS[kind]
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in columns])
    for mapping in mappings:
        writer.writerow([_csv_value(mapping[key]) for _, key in columns])
    return _to_utf8(buffer.getvalue())


def encode_json(mappings: list[dict[str, Any]]) -> bytes:
    """Encode mappings as a pretty-printed JSON array of objects."""
    return _to_utf8(json.dumps(mappings, indent=2, ensure_ascii=False) + "\n")


def encode_property_list(mappings: list[dict[str, Any]]) -> bytes:
    """Encode mappings as an XML property list array of dictionaries.

    Raises:
        MistError: INVALID_DATA if a value cannot be stored in an XML property list
            (control characters, unpaired surrogates)
    """
    try:
        payload = plistlib.dumps(mappings, fmt=plistlib.FMT_XML, sort_keys=False)
    except (TypeError, ValueError, OverflowError) as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e
    # Validate the document decodes as UTF-8 text before it reaches disk
    try:
        payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e
    return payload


def encode_yaml(mappings: list[dict[str, Any]]) -> bytes:
    """Encode mappings as a block-style YAML sequence of mappings."""
    text = yaml.safe_dump(
        mappings,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return _to_utf8(text)


def export_records(path: Path, kind: RecordKind, models: Sequence[BaseModel]) -> Path:
    """Write export models to path in the format implied by its extension.

    Creates missing parent directories first. Nothing is rolled back if the
    write fails after the directories were created.

    Args:
        path: Destination file; its extension must already be validated
        kind: Record kind, selects the CSV header
        models: FirmwareExport or ProductExport instances in display order

    Returns:
        The path that was written

    Raises:
        MistError: INVALID_DATA if the payload cannot be encoded,
            INVALID_EXPORT_FILE_EXTENSION if the extension is unsupported
        OSError: If the directory or file cannot be written
    """
    # pydantic refuses strings that are not valid Unicode (unpaired surrogates)
    try:
        mappings = [model.model_dump(mode="json") for model in models]
    except ValueError as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e

    extension = export_extension(str(path))

    match extension:
        case "csv":
            payload = encode_csv(kind, mappings)
        case "json":
            payload = encode_json(mappings)
        case "plist":
            payload = encode_property_list(mappings)
        case "yaml":
            payload = encode_yaml(mappings)
        case _:
            raise MistError(MistErrorKind.INVALID_EXPORT_FILE_EXTENSION, str(path))

    directory = path.parent
    if not directory.exists():
        output_step(f"Creating parent directory '{directory}'...")
        directory.mkdir(parents=True, exist_ok=True)

    path.write_bytes(payload)
    output_step(f"Exported list as {FORMAT_LABELS[extension]}: '{path}'")
    return path


def export_firmwares(path: Path, firmwares: Sequence[FirmwareRecord]) -> Path:
    """Export firmware records to path. See export_records()."""
    try:
        models = [FirmwareExport.from_record(firmware) for firmware in firmwares]
    except ValidationError as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e
    return export_records(path, "firmware", models)


def export_products(path: Path, products: Sequence[ProductRecord]) -> Path:
    """Export installer product records to path. See export_records()."""
    try:
        models = [ProductExport.from_record(product) for product in products]
    except ValidationError as e:
        raise MistError(MistErrorKind.INVALID_DATA, str(e)) from e
    return export_records(path, "product", models)
