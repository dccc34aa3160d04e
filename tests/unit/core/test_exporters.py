"""Tests for exporting records to CSV, JSON, property list and YAML files."""

import json
import plistlib
from pathlib import Path

import pytest
import yaml

from mist.core.errors import MistError, MistErrorKind
from mist.core.exporters import (
    FirmwareExport,
    ProductExport,
    export_firmwares,
    export_products,
)
from tests.test_utils.records import make_firmware, make_product


def test_firmware_csv_scenario(tmp_path: Path) -> None:
    """Test the CSV header and record line for a single firmware."""
    # Arrange
    path = tmp_path / "list.csv"

    # Act
    result = export_firmwares(path, [make_firmware()])

    # Assert
    assert result == path
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "Signed,Name,Version,Build,Date",
        "true,macOS Sonoma,14.0,23A344,2023-09-26",
    ]


def test_product_csv_header_and_escaping(tmp_path: Path) -> None:
    """Test product CSV uses the Identifier header and quotes embedded commas."""
    # Arrange
    path = tmp_path / "list.csv"
    products = [make_product(name="macOS Sonoma, Beta")]

    # Act
    export_products(path, products)

    # Assert
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Identifier,Name,Version,Build,Date"
    assert lines[1] == '042-58254,"macOS Sonoma, Beta",14.0,23A344,2023-09-26'


def test_unsigned_firmware_csv_writes_false(tmp_path: Path) -> None:
    """Test unsigned firmwares export their boolean as "false"."""
    path = tmp_path / "list.csv"

    export_firmwares(path, [make_firmware(signed=False)])

    assert path.read_text(encoding="utf-8").splitlines()[1].startswith("false,")


def test_json_export_round_trips(tmp_path: Path) -> None:
    """Test parsing the JSON export yields the same records and field values."""
    # Arrange
    path = tmp_path / "list.json"
    firmwares = [make_firmware(), make_firmware(signed=False, version="13.0", build="22A380")]

    # Act
    export_firmwares(path, firmwares)

    # Assert
    text = path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert json.loads(text) == [
        FirmwareExport.from_record(firmware).model_dump(mode="json") for firmware in firmwares
    ]


def test_json_export_key_order(tmp_path: Path) -> None:
    """Test JSON objects list their keys in the documented order."""
    path = tmp_path / "list.json"

    export_products(path, [make_product()])

    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data[0]) == ["identifier", "name", "version", "build", "date", "distribution_url"]


def test_property_list_export_round_trips(tmp_path: Path) -> None:
    """Test parsing the property list export yields an array of dictionaries."""
    # Arrange
    path = tmp_path / "list.plist"
    products = [make_product(), make_product(identifier="052-15153", version="15.0")]

    # Act
    export_products(path, products)

    # Assert
    payload = path.read_bytes()
    assert payload.startswith(b"<?xml")
    assert plistlib.loads(payload) == [
        ProductExport.from_record(product).model_dump(mode="json") for product in products
    ]


def test_yaml_export_round_trips(tmp_path: Path) -> None:
    """Test parsing the YAML export yields the same records, dates kept as strings."""
    # Arrange
    path = tmp_path / "list.yaml"
    firmwares = [make_firmware()]

    # Act
    export_firmwares(path, firmwares)

    # Assert
    text = path.read_text(encoding="utf-8")
    assert text.startswith("- signed: true\n")
    data = yaml.safe_load(text)
    assert data == [FirmwareExport.from_record(firmwares[0]).model_dump(mode="json")]
    assert data[0]["date"] == "2023-09-26"


@pytest.mark.parametrize(
    ("file_name", "parse"),
    [
        ("list.json", lambda path: json.loads(path.read_text(encoding="utf-8"))),
        ("list.plist", lambda path: plistlib.loads(path.read_bytes())),
        ("list.yaml", lambda path: yaml.safe_load(path.read_text(encoding="utf-8"))),
    ],
)
def test_empty_collection_exports_empty_array(tmp_path: Path, file_name: str, parse) -> None:
    """Test structured formats still produce a valid, empty document."""
    path = tmp_path / file_name

    export_firmwares(path, [])

    assert parse(path) == []


def test_empty_collection_csv_is_header_only(tmp_path: Path) -> None:
    """Test CSV export of nothing is just the header line."""
    path = tmp_path / "list.csv"

    export_products(path, [])

    assert path.read_text(encoding="utf-8") == "Identifier,Name,Version,Build,Date\n"


def test_creates_missing_parent_directories(tmp_path: Path) -> None:
    """Test export creates intermediate directories before writing."""
    path = tmp_path / "exports" / "2024" / "list.yaml"

    export_firmwares(path, [make_firmware()])

    assert path.exists()


def test_overwrites_existing_file(tmp_path: Path) -> None:
    """Test an existing export file is replaced."""
    path = tmp_path / "list.csv"
    path.write_text("stale contents\n", encoding="utf-8")

    export_firmwares(path, [make_firmware()])

    assert "stale" not in path.read_text(encoding="utf-8")


def test_unencodable_json_raises_invalid_data(tmp_path: Path) -> None:
    """Test text that cannot be encoded as UTF-8 is rejected before writing."""
    # Arrange
    path = tmp_path / "list.json"
    firmwares = [make_firmware(name="macOS \ud800")]

    # Act / Assert
    with pytest.raises(MistError) as exc_info:
        export_firmwares(path, firmwares)

    assert exc_info.value.kind == MistErrorKind.INVALID_DATA
    assert not path.exists()


def test_control_characters_in_property_list_raise_invalid_data(tmp_path: Path) -> None:
    """Test values an XML property list cannot hold are rejected."""
    path = tmp_path / "list.plist"

    with pytest.raises(MistError) as exc_info:
        export_products(path, [make_product(name="macOS\x00Sonoma")])

    assert exc_info.value.kind == MistErrorKind.INVALID_DATA


def test_filesystem_errors_propagate(tmp_path: Path) -> None:
    """Test OSError from the write reaches the caller untranslated."""
    # Arrange: parent "directory" is actually a file
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    # Act / Assert
    with pytest.raises(OSError):
        export_firmwares(blocker / "list.csv", [make_firmware()])
