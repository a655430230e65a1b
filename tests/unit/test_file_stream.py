"""Unit tests for FileStream."""

import tempfile
from pathlib import Path

import pytest

from recordio import FileStream, FileStreamConfig, RecordReader, RecordWriter, Stream


class TestFileStreamConfig:
    """Test cases for FileStreamConfig validation."""

    def test_defaults(self) -> None:
        config = FileStreamConfig(file_path=Path("records.rec"))
        assert config.mode == "rb"
        assert config.fsync is False

    def test_path_coerced(self) -> None:
        config = FileStreamConfig(file_path="records.rec")  # type: ignore[arg-type]
        assert isinstance(config.file_path, Path)

    @pytest.mark.parametrize("mode", ["r", "w", "a", "rt"])
    def test_text_modes_rejected(self, mode: str) -> None:
        """Only binary modes can carry records."""
        with pytest.raises(ValueError, match="mode"):
            FileStreamConfig(file_path=Path("records.rec"), mode=mode)


class TestFileStream:
    """Test suite for FileStream."""

    @pytest.fixture
    def temp_dir(self) -> Path:
        """Create a temporary directory for test files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture
    def temp_file(self, temp_dir: Path) -> Path:
        """Create a temporary file path."""
        return temp_dir / "records.rec"

    def test_is_stream(self, temp_file: Path) -> None:
        assert isinstance(FileStream(FileStreamConfig(temp_file)), Stream)

    @pytest.mark.asyncio
    async def test_write_and_read_bytes(self, temp_file: Path) -> None:
        """Raw bytes written through the stream land in the file."""
        async with FileStream(FileStreamConfig(temp_file, mode="wb")) as stream:
            assert await stream.write(b"Hello") == 5

        assert temp_file.read_bytes() == b"Hello"

        async with FileStream(FileStreamConfig(temp_file)) as stream:
            assert await stream.read(3) == b"Hel"
            assert await stream.read(10) == b"lo"
            assert await stream.read(10) == b""

    @pytest.mark.asyncio
    async def test_opens_lazily(self, temp_file: Path) -> None:
        """The file is not touched until the first write."""
        stream = FileStream(FileStreamConfig(temp_file, mode="wb"))
        assert not temp_file.exists()

        await stream.write(b"x")
        await stream.close()

        assert temp_file.read_bytes() == b"x"

    @pytest.mark.asyncio
    async def test_records_round_trip(self, temp_file: Path) -> None:
        """Records written to a file read back unchanged."""
        async with RecordWriter(FileStream(FileStreamConfig(temp_file, mode="wb"))) as writer:
            await writer.write(b"Hello")
            await writer.write(b"World")

        assert temp_file.stat().st_size == 18

        reader = RecordReader(FileStream(FileStreamConfig(temp_file)))
        records = [record async for record in reader]
        await reader.close()

        assert records == [b"Hello", b"World"]

    @pytest.mark.asyncio
    async def test_append_mode(self, temp_file: Path) -> None:
        """Appending adds records after the existing ones."""
        for payload in (b"first", b"second"):
            async with RecordWriter(FileStream(FileStreamConfig(temp_file, mode="ab"))) as writer:
                await writer.write(payload)

        reader = RecordReader(FileStream(FileStreamConfig(temp_file)))
        assert [record async for record in reader] == [b"first", b"second"]
        await reader.close()

    @pytest.mark.asyncio
    async def test_flush_with_fsync(self, temp_file: Path) -> None:
        """flush() makes written data visible before close."""
        stream = FileStream(FileStreamConfig(temp_file, mode="wb", fsync=True))
        await stream.write(b"data")

        await stream.flush()

        assert temp_file.read_bytes() == b"data"
        await stream.close()

    @pytest.mark.asyncio
    async def test_flush_before_open(self, temp_file: Path) -> None:
        """Flushing an unopened stream is a no-op."""
        await FileStream(FileStreamConfig(temp_file, mode="wb")).flush()
        assert not temp_file.exists()

    @pytest.mark.asyncio
    async def test_close_idempotent(self, temp_file: Path) -> None:
        stream = FileStream(FileStreamConfig(temp_file, mode="wb"))
        await stream.write(b"x")

        await stream.close()
        await stream.close()

        assert stream.closed

    @pytest.mark.asyncio
    async def test_close_releases_handle_when_flush_fails(self, temp_file: Path) -> None:
        """A failing flush propagates, but the file handle is still closed."""

        class FailingFlushStream(FileStream):
            async def flush(self) -> None:
                raise OSError("no space left on device")

        stream = FailingFlushStream(FileStreamConfig(temp_file, mode="wb"))
        await stream.write(b"x")
        handle = stream._file

        with pytest.raises(OSError, match="no space left"):
            await stream.close()

        assert stream.closed
        assert stream._file is None
        assert handle.closed

        await stream.close()

    @pytest.mark.asyncio
    async def test_use_after_close(self, temp_file: Path) -> None:
        stream = FileStream(FileStreamConfig(temp_file, mode="wb"))
        await stream.close()

        with pytest.raises(RuntimeError, match="closed file stream"):
            await stream.write(b"x")

    @pytest.mark.asyncio
    async def test_missing_file(self, temp_dir: Path) -> None:
        """Opening a missing file for reading raises the OS error unchanged."""
        reader = RecordReader(FileStream(FileStreamConfig(temp_dir / "missing.rec")))

        with pytest.raises(FileNotFoundError):
            await reader.read_record()
