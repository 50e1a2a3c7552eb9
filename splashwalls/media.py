"""Media store - saves walls into a local photo library folder.

The store decodes whatever bytes the fetcher returns with Pillow, flattens
transparency onto a solid background and writes the configured format.
Remote identifiers need an injected fetcher; the default only reads local
files.
"""

from __future__ import annotations
import io
import os
import uuid
from typing import Callable, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname
from PIL import Image, UnidentifiedImageError

from .config import MEDIA_BACKGROUND, MEDIA_FORMAT, MEDIA_QUALITY
from .errors import MediaStoreError
from .logging import log

Fetcher = Callable[[str], bytes]

_EXTENSIONS = {"JPEG": ".jpg", "PNG": ".png", "WEBP": ".webp", "BMP": ".bmp"}


def read_local_file(identifier: str) -> bytes:
    """Default fetcher: read a path or file:// URL from disk."""
    parsed = urlparse(identifier)
    if parsed.scheme == "file":
        path = url2pathname(parsed.path)
    elif not parsed.scheme or len(parsed.scheme) == 1:  # Windows drive letters parse as schemes
        path = identifier
    else:
        raise MediaStoreError(f"no fetcher for {parsed.scheme!r} identifiers: {identifier}")
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise MediaStoreError(f"cannot read {path}: {e}") from e


def flatten_image(img: Image.Image, background=MEDIA_BACKGROUND) -> Image.Image:
    """Convert to RGB, compositing any alpha onto `background`."""
    if img.mode in ('RGBA', 'LA', 'P'):
        if img.mode == 'P':
            img = img.convert('RGBA')
        flat = Image.new('RGB', img.size, background)
        flat.paste(img, mask=img.split()[-1] if img.mode in ('RGBA', 'LA') else None)
        return flat
    if img.mode != 'RGB':
        return img.convert('RGB')
    return img


class DirectoryMediaStore:
    """Writes saved walls into `root`, one uniquely named file per save."""

    def __init__(self, root: str, fetch: Optional[Fetcher] = None,
                 fmt: str = MEDIA_FORMAT, quality: int = MEDIA_QUALITY):
        self.root = root
        self.fetch = fetch or read_local_file
        self.fmt = fmt.upper()
        self.quality = quality

    def save(self, identifier: str) -> str:
        """Save the image behind `identifier`. Returns the written path.

        Raises:
            MediaStoreError: the source could not be read, decoded or written.
        """
        try:
            data = self.fetch(identifier)
        except MediaStoreError:
            raise
        except Exception as e:
            raise MediaStoreError(f"fetch failed for {identifier}: {e!r}") from e

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                flat = flatten_image(img)
        except (UnidentifiedImageError, OSError) as e:
            raise MediaStoreError(f"not an image: {identifier}") from e

        save_kwargs = {}
        if self.fmt == 'JPEG':
            save_kwargs['quality'] = self.quality
            save_kwargs['optimize'] = True
        elif self.fmt == 'PNG':
            save_kwargs['optimize'] = True

        ext = _EXTENSIONS.get(self.fmt, "." + self.fmt.lower())
        path = os.path.join(self.root, f"wall_{uuid.uuid4().hex[:12]}{ext}")
        try:
            os.makedirs(self.root, exist_ok=True)
            flat.save(path, format=self.fmt, **save_kwargs)
        except (OSError, ValueError) as e:
            raise MediaStoreError(f"cannot write {path}: {e}") from e

        log(f"[MEDIA] Saved {flat.width}x{flat.height} to {os.path.basename(path)}")
        return path
