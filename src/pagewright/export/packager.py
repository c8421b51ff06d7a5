"""Zip packaging of exported projects."""

import fnmatch
import io
import zipfile
from pathlib import Path

from pagewright.core import get_logger

logger = get_logger(__name__)

COMPRESSION = zipfile.ZIP_DEFLATED
COMPRESS_LEVEL = 9

# Excluded from upload packages
DEV_PATTERNS = [
    "node_modules/*",
    "*.map",
    "*.ts",
    ".git/*",
    ".gitignore",
    ".eslintrc.*",
    ".prettierrc.*",
    "tsconfig.json",
    "package-lock.json",
    "yarn.lock",
]


def _iter_files(source: Path):
    for path in sorted(source.rglob("*")):
        if path.is_file():
            yield path, path.relative_to(source).as_posix()


def is_dev_file(relative_path: str) -> bool:
    return any(fnmatch.fnmatch(relative_path, pattern) for pattern in DEV_PATTERNS)


def pack_directory(source: str | Path, output: str | Path, exclude_dev: bool = False) -> Path:
    """
    Zip every file under ``source`` with paths relative to it.

    Args:
        source: Directory to pack
        output: Zip file to write; parent directories are created
        exclude_dev: Skip development-only files

    Returns:
        Path of the written archive
    """
    source = Path(source)
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with zipfile.ZipFile(output, "w", compression=COMPRESSION, compresslevel=COMPRESS_LEVEL) as archive:
        for path, relative in _iter_files(source):
            if path.resolve() == output.resolve():
                continue
            if exclude_dev and is_dev_file(relative):
                continue
            archive.write(path, relative)
            count += 1

    logger.info("directory_packed", source=str(source), output=str(output), files=count)
    return output


def pack_for_upload(source: str | Path, output: str | Path) -> Path:
    return pack_directory(source, output, exclude_dev=True)


def pack_files(files: dict[str, str | bytes]) -> bytes:
    """Zip an in-memory file map."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=COMPRESSION, compresslevel=COMPRESS_LEVEL) as archive:
        for name in sorted(files):
            content = files[name]
            archive.writestr(name, content.encode("utf-8") if isinstance(content, str) else content)
    return buffer.getvalue()


def directory_size(path: str | Path) -> int:
    return sum(file.stat().st_size for file, _ in _iter_files(Path(path)))


def count_files(path: str | Path) -> int:
    return sum(1 for _ in _iter_files(Path(path)))


__all__ = [
    "pack_directory",
    "pack_for_upload",
    "pack_files",
    "directory_size",
    "count_files",
    "is_dev_file",
]
