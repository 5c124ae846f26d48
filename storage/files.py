# storage/files.py
import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os
from httpx import HTTPError

from scraper.errors import WriteFailureError
from scraper.models import AssetDescriptor
from scraper.utils import file_extension

logger = logging.getLogger("scraper.storage")


@dataclass
class AssetResult:
    """Outcome of one asset download."""

    descriptor: AssetDescriptor
    path: Path
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _partial_path(path):
    return path.with_name(f".{path.name}.part")


async def _discard(path):
    if path.is_file():
        await aiofiles.os.remove(path)


async def write_json_document(path, data):
    """
    Persist JSON-convertible data at the given file path.

    Parent directories are created as needed. The document is written to a
    temporary sibling first and then moved into place, so a failed write
    never leaves a truncated file behind.

    Args:
        path (str | Path): Destination file path (.json)
        data: JSON-convertible data

    Returns:
        bool: True on success

    Raises:
        WriteFailureError: Directory creation, serialization or the write failed
    """
    path = Path(path)
    tmp_path = _partial_path(path)
    try:
        text = json.dumps(data, ensure_ascii=False)
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(text)
        await aiofiles.os.replace(tmp_path, path)
        return True
    except (OSError, TypeError, ValueError) as e:
        await _discard(tmp_path)
        raise WriteFailureError(path) from e


async def download_asset(crawler, url, path):
    """
    Stream the asset at ``url`` into the file at ``path``.

    Chunks go to a temporary sibling that replaces ``path`` only once the
    stream has finished, so a broken transfer never touches an existing file.

    Returns:
        bool: True once the file is in place

    Raises:
        NoResponseError: The asset could not be fetched
        WriteFailureError: The directory or file could not be written, or the
            stream broke off mid-transfer
    """
    path = Path(path)
    tmp_path = _partial_path(path)
    async with crawler.stream_asset(url) as chunks:
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
        except OSError as e:
            raise WriteFailureError(path) from e
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                async for chunk in chunks:
                    await f.write(chunk)
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, HTTPError) as e:
            await _discard(tmp_path)
            raise WriteFailureError(path) from e
    return True


def asset_file_name(descriptor):
    """``{identifier}.{extension}``, the extension taken from the URL suffix."""
    extension = file_extension(descriptor.url)
    if extension is None:
        return descriptor.identifier
    return f"{descriptor.identifier}.{extension}"


async def download_all_assets(crawler, descriptors, directory):
    """
    Download every asset concurrently into ``directory``.

    Descriptors that map to the same file are downloaded once, from the first
    of them; the others share its outcome. Waits for every download to settle
    and returns one AssetResult per descriptor, in input order, for the
    caller to tally.
    """
    directory = Path(directory).resolve()
    paths = [directory / asset_file_name(d) for d in descriptors]

    # one download per destination path
    first = {}
    for d, p in zip(descriptors, paths):
        first.setdefault(p, d)
    if len(first) < len(descriptors):
        logger.info(
            f"{len(descriptors) - len(first)} duplicate asset(s) share a file "
            "with another download"
        )

    unique_paths = list(first)
    results = await asyncio.gather(
        *(download_asset(crawler, first[p].url, p) for p in unique_paths),
        return_exceptions=True,
    )
    outcome = {
        p: r if isinstance(r, Exception) else None
        for p, r in zip(unique_paths, results)
    }
    return [AssetResult(d, p, outcome[p]) for d, p in zip(descriptors, paths)]
