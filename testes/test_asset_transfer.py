import base64
import os

from conftest import FakeResponse
from models.shopify_theme import Asset
from src.migrators.asset_transfer import (
    FAILED,
    MIGRATED,
    SKIPPED,
    download_asset,
    staged_file_name,
    transfer_asset,
    upload_asset,
)
from src.utils.config import MigrationConfig
from src.utils.errors import CONFIG, HTTP_STATUS

DST = "https://dst.example/admin/api/2024-01/"
PUT_URL = DST + "themes/9/assets.json"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\x00binary"


def _config(**overrides):
    values = dict(destination_store_url=DST, destination_store_token="dst-token")
    values.update(overrides)
    return MigrationConfig(**values)


def test_staged_file_name_drops_directories():
    assert staged_file_name("assets/logo.png") == "logo.png"
    assert staged_file_name("sections/nested/header.liquid") == "header.liquid"


def test_download_writes_bytes_without_auth_header(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://cdn.example/logo.png", FakeResponse(200, content=PNG_BYTES))
    asset = Asset(key="assets/logo.png", public_url="https://cdn.example/logo.png")

    result = download_asset(asset, str(tmp_path))

    assert result.ok
    assert result.value == os.path.join(str(tmp_path), "logo.png")
    with open(result.value, "rb") as f:
        assert f.read() == PNG_BYTES
    assert "headers" not in fake_shopify.calls[0]


def test_download_failure_names_key_and_writes_nothing(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://cdn.example/gone.css", FakeResponse(404, reason="Not Found"))
    asset = Asset(key="assets/gone.css", public_url="https://cdn.example/gone.css")

    result = download_asset(asset, str(tmp_path))

    assert result.kind == HTTP_STATUS
    assert result.message == "Error downloading assets/gone.css: Not Found"
    assert not (tmp_path / "gone.css").exists()


def test_same_base_name_overwrites_staged_file_with_warning(fake_shopify, tmp_path, capsys):
    fake_shopify.add("GET", "https://cdn.example/assets/logo.png", FakeResponse(200, content=b"first"))
    fake_shopify.add("GET", "https://cdn.example/snippets/logo.png", FakeResponse(200, content=b"second"))

    first = download_asset(Asset(key="assets/logo.png", public_url="https://cdn.example/assets/logo.png"), str(tmp_path))
    assert "Overwriting staged file" not in capsys.readouterr().out
    second = download_asset(Asset(key="snippets/logo.png", public_url="https://cdn.example/snippets/logo.png"), str(tmp_path))

    out = capsys.readouterr().out
    assert "[WARNING] Overwriting staged file" in out
    assert "snippets/logo.png" in out
    assert first.value == second.value
    assert (tmp_path / "logo.png").read_bytes() == b"second"


def test_key_reaches_put_body_unchanged(fake_shopify, tmp_path):
    key = " assets/a b.css "
    fake_shopify.add("GET", "https://x/a.css", FakeResponse(200, content=b"a{}"))
    fake_shopify.add("PUT", PUT_URL, FakeResponse(200, {"asset": {}}))
    asset = Asset(key=key, public_url="https://x/a.css")

    outcome = transfer_asset(asset, _config(staging_dir=str(tmp_path)), 9)

    assert asset.key == key
    assert outcome.status == MIGRATED
    assert fake_shopify.calls_for("PUT")[0]["json"]["asset"]["key"] == key


def test_upload_payload_decodes_to_downloaded_bytes(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://cdn.example/logo.png", FakeResponse(200, content=PNG_BYTES))
    fake_shopify.add("PUT", PUT_URL, FakeResponse(200, {"asset": {"key": "assets/logo.png"}}))
    asset = Asset(key="assets/logo.png", public_url="https://cdn.example/logo.png")

    staged = download_asset(asset, str(tmp_path)).value
    result = upload_asset(DST, "dst-token", 9, asset.key, staged)

    assert result.ok
    body = fake_shopify.calls_for("PUT")[0]["json"]
    assert body["asset"]["key"] == "assets/logo.png"
    assert base64.b64decode(body["asset"]["attachment"]) == PNG_BYTES


def test_upload_success_removes_staged_file(fake_shopify, tmp_path):
    staged = tmp_path / "a.css"
    staged.write_bytes(b"body{}")
    fake_shopify.add("PUT", PUT_URL, FakeResponse(200, {"asset": {}}))

    result = upload_asset(DST, "dst-token", 9, "assets/a.css", str(staged))

    assert result.ok
    assert not staged.exists()


def test_upload_failure_leaves_staged_file_behind(fake_shopify, tmp_path):
    staged = tmp_path / "a.css"
    staged.write_bytes(b"body{}")
    fake_shopify.add("PUT", PUT_URL, FakeResponse(422, {"errors": {"asset": ["is invalid"]}}))

    result = upload_asset(DST, "dst-token", 9, "assets/a.css", str(staged))

    assert result.kind == HTTP_STATUS
    assert result.message.startswith("Error uploading assets/a.css: 422 - ")
    # Leaked on purpose: a failed upload keeps the staged copy.
    assert staged.exists()


def test_upload_without_destination_token_makes_no_network_call(fake_shopify, tmp_path):
    staged = tmp_path / "a.css"
    staged.write_bytes(b"body{}")

    result = upload_asset(DST, "", 9, "assets/a.css", str(staged))

    assert result.kind == CONFIG
    assert fake_shopify.calls == []
    assert staged.exists()


def test_transfer_skips_asset_without_public_url(fake_shopify):
    outcome = transfer_asset(Asset(key="layout/theme.liquid"), _config(), 9)
    assert outcome.status == SKIPPED
    assert fake_shopify.calls == []


def test_transfer_single_css_asset(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://x/a.css", FakeResponse(200, content=b"body{color:red}"))
    fake_shopify.add("PUT", PUT_URL, FakeResponse(200, {"asset": {"key": "assets/a.css"}}))
    asset = Asset(key="assets/a.css", public_url="https://x/a.css")

    outcome = transfer_asset(asset, _config(staging_dir=str(tmp_path)), 9)

    assert outcome.status == MIGRATED
    assert [(c["method"], c["url"]) for c in fake_shopify.calls] == [("GET", "https://x/a.css"), ("PUT", PUT_URL)]
    assert fake_shopify.calls[1]["json"]["asset"]["key"] == "assets/a.css"
    assert not (tmp_path / "a.css").exists()


def test_transfer_upload_failure_reports_orphaned_file(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://x/a.css", FakeResponse(200, content=b"body{}"))
    fake_shopify.add("PUT", PUT_URL, FakeResponse(500, {"errors": "oops"}))
    asset = Asset(key="assets/a.css", public_url="https://x/a.css")

    outcome = transfer_asset(asset, _config(staging_dir=str(tmp_path)), 9)

    assert outcome.status == FAILED
    assert outcome.code == "ASSET_UPLOAD"
    assert outcome.staged_path == os.path.join(str(tmp_path), "a.css")
    assert (tmp_path / "a.css").exists()


def test_transfer_download_failure_skips_upload(fake_shopify, tmp_path):
    fake_shopify.add("GET", "https://x/a.css", FakeResponse(503, reason="Service Unavailable"))
    asset = Asset(key="assets/a.css", public_url="https://x/a.css")

    outcome = transfer_asset(asset, _config(staging_dir=str(tmp_path)), 9)

    assert outcome.status == FAILED
    assert outcome.code == "ASSET_DOWNLOAD"
    assert outcome.staged_path is None
    assert fake_shopify.calls_for("PUT") == []
