"""Test configuration utilities and shared fixtures."""

import sqlite3
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import msgpack  # noqa: E402
import pytest  # noqa: E402
import yaml  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from langunpack.app import create_app  # noqa: E402
from langunpack.config import ExtractionSettings  # noqa: E402
from langunpack.services import extract_all  # noqa: E402

CatalogEntry = Sequence[str]


def write_catalog(path: Path, rows: Iterable[CatalogEntry]) -> Path:
    """Write a ``.msg`` catalog; rows are ``(id_hash, text)`` or ``(id_hash, sub_id, text)``."""

    encoded = []
    for row in rows:
        if len(row) == 2:
            id_hash, text = row
            sub_id = ""
        else:
            id_hash, sub_id, text = row
        encoded.append({"column_": {"id_hash_": id_hash, "sub_id_": sub_id, "text_": text}})

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(msgpack.packb({"rows_": encoded}, use_bin_type=True))
    return path


def write_database(path: Path, tables: dict[str, tuple[Sequence[str], list[tuple[Any, ...]]]]) -> Path:
    """Create a SQLite file holding ``{table: (columns, rows)}``."""

    connection = sqlite3.connect(path)
    try:
        for table, (columns, rows) in tables.items():
            column_list = ", ".join(f"{column} TEXT" for column in columns)
            connection.execute(f"CREATE TABLE {table} ({column_list})")
            placeholders = ", ".join("?" for _ in columns)
            connection.executemany(f"INSERT INTO {table} VALUES ({placeholders})", rows)
        connection.commit()
    finally:
        connection.close()
    return path


CATALOGS: dict[str, dict[str, list[CatalogEntry]]] = {
    "en": {
        "text.msg": [
            ("TXT_WP0001", "Sword"),
            ("TXT_WP0002", "Spear"),
            ("TXT_WP0001", "Sword of Light"),
        ],
        "text_chara.msg": [
            ("TXT_PL0000", "Gran"),
            ("TXT_PL0100", ""),
            ("TXT_EM7700", "Bahamut"),
        ],
        "text_limit_bonus.msg": [("TXT_LB_ATK", "Attack Up")],
        "text_stage.msg": [
            ("TXT_QR_0042_title", "Find the Sword"),
            ("TXT_QR_0043_title", "Slay the Dragon"),
            ("TXT_OTHER_1", "Ignored"),
        ],
    },
    "jp": {
        "text.msg": [("TXT_WP0001", "剣"), ("TXT_WP0002", "")],
        "text_chara.msg": [("TXT_PL0000", "グラン"), ("TXT_EM7700", "バハムート")],
        "text_limit_bonus.msg": [("TXT_LB_ATK", "攻撃力アップ")],
        "text_stage.msg": [("TXT_QR_0042_title", "剣を探せ")],
    },
}

TABLES = {
    "weapon": (
        ("Key", "Name"),
        [("Wp0001", "TXT_WP0001"), ("Wp0002", "TXT_WP0002"), ("Wp0003", None), ("Wp0004", "TXT_MISSING")],
    ),
    "enemy": (("KeyMaybe", "VariantName1"), [("EM7700", "TXT_EM7700"), (None, "TXT_EM7700")]),
    "limit_bonus_param": (("Key", "Unk16"), [("LB_ATK", "TXT_LB_ATK")]),
}

CATEGORIES: list[dict[str, Any]] = [
    {
        "name": "characters",
        "source": "id_table",
        "catalog": "{language}/text_chara.msg",
        "identifier": "fixed_id_table",
        "id_table": {"Pl0000": "TXT_PL0000", "Pl0100": "TXT_PL0100"},
    },
    {
        "name": "overmasteries",
        "query": "SELECT Key, Unk16 FROM limit_bonus_param WHERE Unk16 IS NOT NULL",
        "catalog": "{language}/text_limit_bonus.msg",
        "identifier": "lowercase_key",
    },
    {
        "name": "weapons",
        "query": "SELECT Key, Name FROM weapon WHERE Name IS NOT NULL AND Key IS NOT NULL",
        "catalog": "{language}/text.msg",
        "identifier": "hash_of_key_hex",
    },
    {
        "name": "quests",
        "source": "catalog",
        "catalog": "{language}/text_stage.msg",
        "identifier": "substring_extraction",
        "prefix": "TXT_QR",
    },
    {
        "name": "enemies",
        "query": "SELECT KeyMaybe, VariantName1 FROM enemy",
        "catalog": "{language}/text_chara.msg",
        "key_transform": "alphanumeric_title_case",
        "identifier": "hash_of_key_hex",
    },
]


@dataclass(frozen=True)
class Workspace:
    """On-disk fixture data mirroring a game dump."""

    root: Path
    settings: ExtractionSettings
    config_path: Path

    @property
    def text_root(self) -> Path:
        return Path(self.settings.text_root)

    @property
    def output_root(self) -> Path:
        return Path(self.settings.output_root)

    @property
    def database(self) -> Path:
        return Path(self.settings.database)


@pytest.fixture()
def catalog_writer() -> Callable[[Path, Iterable[CatalogEntry]], Path]:
    """Expose the ``.msg`` writer to tests that build their own catalogs."""

    return write_catalog


@pytest.fixture()
def workspace(tmp_path: Path) -> Workspace:
    """Return settings pointing at freshly written catalogs and a SQLite dump."""

    text_root = tmp_path / "text"
    for language, files in CATALOGS.items():
        for filename, rows in files.items():
            write_catalog(text_root / language / filename, rows)

    database = write_database(tmp_path / "system_table.sqlite", TABLES)

    raw_settings = {
        "languages": ["en", "jp"],
        "database": str(database),
        "text_root": str(text_root),
        "output_root": str(tmp_path / "data"),
        "categories": CATEGORIES,
    }
    config_path = tmp_path / "extraction.yaml"
    config_path.write_text(yaml.safe_dump(raw_settings, sort_keys=False), encoding="utf-8")

    return Workspace(
        root=tmp_path,
        settings=ExtractionSettings.model_validate(raw_settings),
        config_path=config_path,
    )


@pytest.fixture()
def extracted(workspace: Workspace) -> Workspace:
    """Workspace whose tables have already been extracted."""

    report = extract_all(workspace.settings)
    assert report.ok, report.failures
    return workspace


@pytest.fixture()
def app(extracted: Workspace) -> Flask:
    """Return a configured Flask application serving the extracted tables."""

    application = create_app(extracted.settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
