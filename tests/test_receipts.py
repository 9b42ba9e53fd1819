import asyncio
import base64

import pytest

from errors import NotFound
from receipts import ReceiptStore, generate_filename, strip_data_url

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def store(tmp_path):
    return ReceiptStore(str(tmp_path / "uploads"))


def ingest(store, payload):
    return asyncio.run(store.ingest(payload))


def test_strip_data_url():
    assert strip_data_url("data:image/png;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"


def test_generated_filenames_differ():
    names = {generate_filename() for _ in range(50)}
    assert len(names) == 50
    assert all(n.startswith("receipt-") and n.endswith(".jpg") for n in names)


def test_ingest_creates_directory_and_file(store):
    reference = ingest(store, base64.b64encode(PNG_BYTES).decode())

    assert reference.startswith("/uploads/")
    assert store.retrieve(reference).read_bytes() == PNG_BYTES


def test_retrieve_by_bare_filename(store):
    reference = ingest(store, base64.b64encode(PNG_BYTES).decode())
    filename = reference.rsplit("/", 1)[1]
    assert store.retrieve(filename) == store.upload_dir / filename


@pytest.mark.parametrize("payload", ["%%%", "data:image/png;base64,@@@", "", "QUJ"])
def test_bad_payload_returns_none(store, payload):
    assert ingest(store, payload) is None
    assert not store.upload_dir.exists() or not any(store.upload_dir.iterdir())


def test_write_failure_returns_none(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    store = ReceiptStore(str(blocker))

    assert ingest(store, base64.b64encode(PNG_BYTES).decode()) is None


@pytest.mark.parametrize("name", ["missing.jpg", "../secret.txt", "..", "a/b.jpg", ""])
def test_retrieve_missing_or_unsafe(store, name):
    with pytest.raises(NotFound):
        store.retrieve(name)
