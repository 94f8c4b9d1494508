import pytest

from drive_migration.adapters.local_document_adapter import LocalDocumentAdapter
from drive_migration.domain.errors import DocumentError
from drive_migration.domain.models import FileContent


def test_open_document_from_file_uri(tmp_path) -> None:
    path = tmp_path / "my notes.txt"
    path.write_text("line one\nline two\n", encoding="utf-8")

    result = LocalDocumentAdapter().open_document(path.as_uri())

    assert result == FileContent(name="my notes.txt", content="line one\nline two\n")


def test_open_document_from_plain_path(tmp_path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("hello", encoding="utf-8")

    result = LocalDocumentAdapter().open_document(str(path))

    assert result.name == "a.txt"
    assert result.content == "hello"


def test_missing_document_raises(tmp_path) -> None:
    with pytest.raises(DocumentError, match="No document found"):
        LocalDocumentAdapter().open_document((tmp_path / "missing.txt").as_uri())


def test_binary_document_raises(tmp_path) -> None:
    path = tmp_path / "image.txt"
    path.write_bytes(b"\xff\xfe\x00\x80")

    with pytest.raises(DocumentError, match="is not utf-8 text"):
        LocalDocumentAdapter().open_document(str(path))


@pytest.mark.parametrize("locator", ["", "   ", "content://docs/42"])
def test_unusable_locators_raise(locator) -> None:
    with pytest.raises(DocumentError):
        LocalDocumentAdapter().open_document(locator)
