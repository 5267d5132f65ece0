"""Image payload encoding for Retouch.

Uploaded files travel through the application as :class:`ImagePayload`
objects: the raw bytes plus their media type. The textual, self-describing
form of a payload is a base64 data URL::

    data:image/png;base64,iVBORw0KGgo...

which is what the JSON API exchanges and what the editor state can be
serialized to. Conversion is lossless in both directions.

Reading a file is all-or-nothing: :func:`encode_file` either returns a
complete payload whose bytes Pillow can decode, or raises
:class:`~retouch.core.errors.ImageReadError`.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import mimetypes
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from PIL import Image, ImageDraw

from .errors import ImageReadError

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL
)

PLACEHOLDER_SIZE = (768, 768)

# Pillow formats that are plain images of another type as far as a viewer or
# the generation service is concerned. MPO is the multi-picture JPEG written
# by most phone cameras.
FORMAT_MEDIA_TYPES = {
    "MPO": "image/jpeg",
}


@dataclass(frozen=True)
class ImagePayload:
    """Binary image content paired with its media type."""

    data: bytes = field(repr=False)
    media_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def b64data(self) -> str:
        """Base64 text of the image bytes, without data URL framing."""
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.b64data}"

    @classmethod
    def from_base64(cls, b64data: str, media_type: str) -> ImagePayload:
        try:
            data = base64.b64decode(b64data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageReadError(f"Invalid base64 image data: {e}") from e
        if not data:
            raise ImageReadError("Image data is empty")
        return cls(data=data, media_type=media_type)

    @classmethod
    def from_data_url(cls, data_url: str) -> ImagePayload:
        """Parse a ``data:<media type>;base64,<data>`` string.

        Raises:
            ImageReadError: If the string is not a base64 data URL
        """
        match = _DATA_URL_RE.match(data_url.strip()) if data_url else None
        if match is None:
            raise ImageReadError("Expected a base64 data URL (data:<type>;base64,...)")
        return cls.from_base64(match.group("data"), match.group("media_type").lower())

    @classmethod
    def from_pil(cls, image: Image.Image, fmt: str = "PNG") -> ImagePayload:
        buffer = io.BytesIO()
        image.save(buffer, format=fmt)
        return cls(data=buffer.getvalue(), media_type=Image.MIME[fmt.upper()])

    def to_pil(self) -> Image.Image:
        """Decode the payload into a displayable PIL image.

        Raises:
            ImageReadError: If the bytes are not a decodable image
        """
        try:
            image = Image.open(io.BytesIO(self.data))
            image.load()
        except (OSError, ValueError, SyntaxError) as e:
            raise ImageReadError(f"Image data could not be decoded: {e}") from e
        return image

    def verify(self) -> str | None:
        """Check the bytes decode as an image and return the sniffed media type."""
        return sniff_media_type(self.data)

    def verified(self) -> ImagePayload:
        """Check the bytes decode as an image and label them with the sniffed type.

        The declared media type is replaced when the content says otherwise, so
        a mislabelled body cannot slip past a media type allow-list.

        Raises:
            ImageReadError: If the bytes are not a readable image
        """
        sniffed = self.verify()
        if sniffed and sniffed != self.media_type:
            logger.warning(f"Payload declared as {self.media_type} but contains {sniffed}")
            return ImagePayload(data=self.data, media_type=sniffed)
        return self


def sniff_media_type(data: bytes) -> str | None:
    """Identify image bytes with Pillow.

    Args:
        data: Raw file content

    Returns:
        Media type reported by Pillow for the detected format, or None if the
        format has no registered media type

    Raises:
        ImageReadError: If Pillow cannot identify or verify the image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format
            image.verify()
    except (OSError, ValueError, SyntaxError) as e:
        raise ImageReadError(f"File is not a readable image: {e}") from e
    if not fmt:
        return None
    return FORMAT_MEDIA_TYPES.get(fmt) or Image.MIME.get(fmt)


def encode_file(source: str | Path | BinaryIO, media_type: str | None = None) -> ImagePayload:
    """Read an image file into an :class:`ImagePayload`.

    Args:
        source: Path to the file, or an open binary file object
        media_type: Media type reported by the caller (e.g. the browser). The
            type sniffed from the content takes precedence; the declared type,
            then a guess from the name, are only used when sniffing finds none.

    Returns:
        Payload with the complete file content

    Raises:
        ImageReadError: If the file cannot be read, is empty, or is not an image
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        name = path.name
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageReadError(f"Could not read {name}: {e.strerror or e}") from e
    else:
        name = Path(getattr(source, "name", "") or "").name
        try:
            data = source.read()
        except (OSError, ValueError) as e:
            raise ImageReadError(f"Could not read uploaded file: {e}") from e

    if not data:
        raise ImageReadError(f"File {name or '(upload)'} is empty")

    sniffed = sniff_media_type(data)
    guessed = mimetypes.guess_type(name)[0] if name else None
    if sniffed and media_type and media_type.lower() != sniffed:
        logger.warning(f"{name or 'Upload'} declared as {media_type} but contains {sniffed}")
    resolved = sniffed or media_type or guessed
    if not resolved:
        raise ImageReadError("Could not determine the image type")

    logger.debug(f"Encoded {name or 'upload'}: {len(data)} bytes as {resolved}")
    return ImagePayload(data=data, media_type=resolved)


def default_image(path: Path | None = None) -> ImagePayload:
    """Return the image shown as the original before anything is uploaded.

    Args:
        path: Optional image file to use instead of the drawn placeholder

    Returns:
        Payload for the built-in default original image
    """
    if path is not None:
        try:
            return encode_file(path)
        except ImageReadError as e:
            logger.warning(f"Default image {path} unusable, using placeholder: {e}")

    width, height = PLACEHOLDER_SIZE
    image = Image.new("RGB", PLACEHOLDER_SIZE, (31, 41, 55))
    draw = ImageDraw.Draw(image)
    # Head and shoulders silhouette
    draw.ellipse(
        (width * 0.35, height * 0.18, width * 0.65, height * 0.48), fill=(75, 85, 99)
    )
    draw.pieslice(
        (width * 0.18, height * 0.52, width * 0.82, height * 1.12),
        start=180,
        end=360,
        fill=(75, 85, 99),
    )
    draw.text((width * 0.4, height * 0.08), "Upload a photo", fill=(209, 213, 219))
    return ImagePayload.from_pil(image)
