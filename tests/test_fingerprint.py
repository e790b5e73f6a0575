"""
Tests for document fingerprinting.
"""

import io

import pytest

from app.core.errors import DocumentReadError
from app.services.document_analysis import generate_document_hash, read_document_bytes

ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TestGenerateDocumentHash:

    def test_known_digest(self):
        result = generate_document_hash(b"abc")
        assert result.algorithm == "SHA-256"
        assert result.hash == ABC_SHA256
        assert result.file_size == 3
        assert result.timestamp.endswith("Z")

    def test_identical_bytes_identical_digest(self, blank_png):
        assert generate_document_hash(blank_png).hash == generate_document_hash(bytes(blank_png)).hash

    def test_single_byte_change_changes_digest(self, blank_png):
        tampered = bytearray(blank_png)
        tampered[len(tampered) // 2] ^= 0x01
        assert generate_document_hash(blank_png).hash != generate_document_hash(tampered).hash

    def test_empty_document_hashes(self):
        result = generate_document_hash(b"")
        assert result.file_size == 0
        assert result.hash == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_path_and_bytes_agree(self, tmp_path, blank_png):
        path = tmp_path / "scan.png"
        path.write_bytes(blank_png)
        from_path = generate_document_hash(path)
        assert from_path.hash == generate_document_hash(blank_png).hash
        assert from_path.file_size == len(blank_png)

    def test_file_name_does_not_affect_digest(self, tmp_path):
        first = tmp_path / "deed.pdf"
        second = tmp_path / "renamed-copy.png"
        first.write_bytes(b"same content")
        second.write_bytes(b"same content")
        assert generate_document_hash(str(first)).hash == generate_document_hash(second).hash

    def test_binary_stream(self):
        assert generate_document_hash(io.BytesIO(b"abc")).hash == ABC_SHA256


class TestReadFailures:

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentReadError, match="Failed to read document"):
            generate_document_hash(tmp_path / "missing.png")

    def test_none(self):
        with pytest.raises(DocumentReadError):
            generate_document_hash(None)

    def test_text_stream_rejected(self):
        with pytest.raises(DocumentReadError, match="binary mode"):
            read_document_bytes(io.StringIO("not bytes"))

    def test_empty_text_stream_rejected(self):
        with pytest.raises(DocumentReadError, match="binary mode"):
            read_document_bytes(io.StringIO(""))

    def test_closed_stream(self):
        stream = io.BytesIO(b"abc")
        stream.close()
        with pytest.raises(DocumentReadError, match="Failed to read document stream"):
            generate_document_hash(stream)

    def test_unsupported_type(self):
        with pytest.raises(DocumentReadError, match="int"):
            read_document_bytes(42)

    def test_stream_read_error(self):
        class BrokenStream:
            def read(self, size=-1):
                raise OSError("disk went away")

        with pytest.raises(DocumentReadError, match="disk went away"):
            read_document_bytes(BrokenStream())
