"""Image list providers and display URL helpers."""

from __future__ import annotations
import os
from typing import List, Optional, Protocol, Sequence
from PIL import Image
from PIL.ExifTags import Base

from .config import IMG_EXTS, IMAGE_URL_TEMPLATE, UNKNOWN_AUTHOR
from .errors import ImageListError
from .logging import log
from .types import ImageRecord


class ImageProvider(Protocol):
    """Supplies the ordered list of walls to sample from."""

    def fetch(self) -> Sequence[ImageRecord]: ...


def display_url(record: ImageRecord, template: str = IMAGE_URL_TEMPLATE) -> str:
    """URL (or local path) the wall is displayed and saved from."""
    if record.source:
        return record.source
    return template.format(width=record.width, height=record.height, id=record.id)


def list_images(dirpath: str) -> List[str]:
    """List all supported image files in directory, sorted by name.

    Raises:
        ImageListError: the directory cannot be read.
    """
    try:
        names = sorted(os.listdir(dirpath))
    except OSError as e:
        raise ImageListError(f"cannot list {dirpath}: {e}") from e

    result = []
    for name in names:
        path = os.path.join(dirpath, name)
        ext = os.path.splitext(name)[1].lower()
        if os.path.isfile(path) and ext in IMG_EXTS:
            result.append(path)
    return result


def read_record(index: int, path: str) -> Optional[ImageRecord]:
    """Build a record for one file, or None if Pillow cannot open it."""
    author = UNKNOWN_AUTHOR
    try:
        with Image.open(path) as img:
            width, height = img.size
            artist = img.getexif().get(Base.Artist)
            if artist:
                author = str(artist).strip() or UNKNOWN_AUTHOR
    except OSError as e:
        log(f"[PROVIDER] Skipping {os.path.basename(path)}: {e}")
        return None
    return ImageRecord(id=index, width=width, height=height, author=author, source=path)


class DirectoryImageProvider:
    """Serves the images of one local folder as wall records."""

    def __init__(self, dirpath: str):
        self.dirpath = dirpath

    def fetch(self) -> List[ImageRecord]:
        records = []
        for path in list_images(self.dirpath):
            record = read_record(len(records), path)
            if record is not None:
                records.append(record)
        log(f"[PROVIDER] {len(records)} images in {self.dirpath}")
        return records
