import mimetypes
import os
from typing import Callable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Human readable size in base 1024, e.g. 157286400 -> '150 MB'."""
    if num_bytes <= 0:
        return "0 Bytes"
    i = 0
    while i < len(SIZE_UNITS) - 1 and num_bytes >= 1024 ** (i + 1):
        i += 1
    value = round(num_bytes / (1024 ** i), max(decimals, 0))
    return f"{value:g} {SIZE_UNITS[i]}"


class MediaFile(BaseModel):
    """
    Handle to a user selected video. The bytes are only read when the file is
    encoded for a request.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the file.")
    size: int = Field(..., ge=0, description="Size of the payload in bytes.")
    mime_type: str = Field(..., description="Declared media type, e.g. 'video/mp4'.")
    loader: Callable[[], bytes] = Field(..., exclude=True, repr=False)

    def read(self) -> bytes:
        return self.loader()

    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "MediaFile":
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path)
        abs_path = os.path.abspath(path)

        def _load() -> bytes:
            with open(abs_path, "rb") as f:
                return f.read()

        return cls(
            name=os.path.basename(path),
            size=os.path.getsize(abs_path),
            mime_type=mime_type or "application/octet-stream",
            loader=_load,
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str) -> "MediaFile":
        return cls(name=name, size=len(data), mime_type=mime_type, loader=lambda: data)


class WorkingSet:
    """
    Ordered video parts staged for one analysis. Order is the temporal order
    of the demonstration (Part 1, Part 2, ...). New files only come in through
    UploadValidatorAgent.add so the size ceilings always hold.
    """
    def __init__(self):
        self._files: List[MediaFile] = []

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[MediaFile]:
        return iter(list(self._files))

    def __getitem__(self, index: int) -> MediaFile:
        return self._files[index]

    @property
    def files(self) -> List[MediaFile]:
        return list(self._files)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self._files)

    def labels(self) -> List[str]:
        return [f"Part {i + 1}" for i in range(len(self._files))]

    def extend(self, files: List[MediaFile]):
        """Appends already validated files, keeping their order."""
        self._files.extend(files)

    def remove(self, index: int) -> MediaFile:
        # Later parts shift down by one
        if not 0 <= index < len(self._files):
            raise IndexError(f"No video part at index {index} (working set has {len(self._files)}).")
        return self._files.pop(index)

    def clear(self):
        self._files.clear()
