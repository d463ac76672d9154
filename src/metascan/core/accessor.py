"""metascan — Metadata accessor.

Extraction backends emit the same semantic field under different keys
(``ExifIFD:DateTimeOriginal``, ``EXIF:DateTimeOriginal``, plain ``DateTimeOriginal``).
Each semantic field has a priority-ordered chain; the first non-empty value wins.
Lookups never raise.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

# --- Priority chains (highest priority first) ---

MAKE_KEYS = ("EXIF:Make", "IFD0:Make", "Make")
MODEL_KEYS = ("EXIF:Model", "IFD0:Model", "Model")

CAPTURE_DATE_KEYS = (
    "ExifIFD:DateTimeOriginal",
    "ExifIFD:CreateDate",
    "EXIF:DateTimeOriginal",
    "EXIF:CreateDate",
    "IFD0:ModifyDate",
    "DateTimeOriginal",
    "CreateDate",
    "Composite:SubSecDateTimeOriginal",
)
OFFSET_KEYS = (
    "ExifIFD:OffsetTimeOriginal",
    "ExifIFD:OffsetTime",
    "EXIF:OffsetTimeOriginal",
    "EXIF:OffsetTime",
    "OffsetTimeOriginal",
    "OffsetTime",
)

# Presence only: any of these suppresses the "date absent" rule.
ANY_DATE_KEYS = (
    "EXIF:DateTime",
    "EXIF:DateTimeOriginal",
    "EXIF:CreateDate",
    "EXIF:ModifyDate",
    "ExifIFD:DateTime",
    "ExifIFD:DateTimeOriginal",
    "ExifIFD:CreateDate",
    "IFD0:DateTime",
    "IFD0:ModifyDate",
    "XMP:CreateDate",
    "XMP:ModifyDate",
    "XMP:DateTimeOriginal",
    "XMP-xmp:CreateDate",
    "XMP-xmp:ModifyDate",
    "XMP-exif:DateTimeOriginal",
    "XMP-photoshop:DateCreated",
    "Composite:SubSecDateTimeOriginal",
    "DateTime",
    "DateTimeOriginal",
    "CreateDate",
    "ModifyDate",
)

ORIGINAL_DATE_KEYS = ("ExifIFD:DateTimeOriginal", "EXIF:DateTimeOriginal", "DateTimeOriginal")
CREATE_DATE_KEYS = ("ExifIFD:CreateDate", "EXIF:CreateDate", "CreateDate")
MODIFY_DATE_KEYS = ("IFD0:ModifyDate", "EXIF:ModifyDate", "EXIF:DateTime", "IFD0:DateTime", "ModifyDate")

SOFTWARE_KEYS = ("EXIF:Software", "IFD0:Software", "Software")
CREATOR_TOOL_KEYS = ("XMP:CreatorTool", "XMP-xmp:CreatorTool", "XMP-photoshop:CreatorTool", "CreatorTool")
CREATOR_KEYS = ("XMP:Creator", "XMP-dc:Creator", "Creator")

FILE_TYPE_KEYS = ("File:FileType", "FileType")
ENCODING_KEYS = ("File:EncodingProcess", "EncodingProcess")
SUBSAMPLING_KEYS = ("File:YCbCrSubSampling", "EXIF:YCbCrSubSampling", "IFD0:YCbCrSubSampling", "YCbCrSubSampling")
JFIF_KEYS = ("JFIF:JFIFVersion", "JFIFVersion")

EXIF_WIDTH_KEYS = ("ExifIFD:ExifImageWidth", "EXIF:ExifImageWidth", "EXIF:ImageWidth", "ExifImageWidth")
EXIF_HEIGHT_KEYS = ("ExifIFD:ExifImageHeight", "EXIF:ExifImageHeight", "EXIF:ImageHeight", "ExifImageHeight")
FILE_WIDTH_KEYS = ("File:ImageWidth", "ImageWidth")
FILE_HEIGHT_KEYS = ("File:ImageHeight", "ImageHeight")

ICC_DESCRIPTION_KEYS = ("ICC_Profile:ProfileDescription", "ICC-desc:ProfileDescription", "ProfileDescription")
ICC_COPYRIGHT_KEYS = ("ICC_Profile:ProfileCopyright", "ICC-cprt:ProfileCopyright", "ProfileCopyright")
ICC_VENDOR_KEYS = (
    "ICC_Profile:DeviceManufacturer",
    "ICC_Profile:ProfileCMMType",
    "ICC_Profile:ProfileCreator",
    "ICC-header:DeviceManufacturer",
    "ICC-header:ProfileCMMType",
    "ICC-header:ProfileCreator",
    "DeviceManufacturer",
    "ProfileCMMType",
    "ProfileCreator",
)
ICC_GROUP_PREFIXES = ("ICC_Profile:", "ICC-header:", "ICC-desc:", "ICC-cprt:")

_EMBEDDED_OFFSET = re.compile(r"(?:[+-]\d{2}:?\d{2}|Z)$")


class MetadataAccessor:
    """Read-only view over one metadata map."""

    __slots__ = ("_data", "_lowered")

    def __init__(self, metadata: Mapping[str, Any]) -> None:
        self._data = metadata
        self._lowered: tuple[str, ...] | None = None

    @classmethod
    def wrap(cls, metadata: Mapping[str, Any] | MetadataAccessor) -> MetadataAccessor:
        if isinstance(metadata, MetadataAccessor):
            return metadata
        return cls(metadata)

    @property
    def raw(self) -> Mapping[str, Any]:
        return self._data

    # --- generic lookups ---

    @staticmethod
    def _is_empty(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        return False

    def get(self, key: str) -> Any:
        value = self._data.get(key)
        return None if self._is_empty(value) else value

    def first(self, chain: tuple[str, ...]) -> Any:
        """Return the first non-empty value along ``chain``, or None."""
        for key in chain:
            value = self.get(key)
            if value is not None:
                return value
        return None

    def first_str(self, chain: tuple[str, ...]) -> str:
        value = self.first(chain)
        return "" if value is None else str(value).strip()

    def first_with_key(self, chain: tuple[str, ...]) -> tuple[str | None, Any]:
        for key in chain:
            value = self.get(key)
            if value is not None:
                return key, value
        return None, None

    def has_any(self, chain: tuple[str, ...]) -> bool:
        return any(self.get(k) is not None for k in chain)

    def as_int(self, chain: tuple[str, ...]) -> int:
        """Integer value of the first non-empty field; 0 when missing or not numeric."""
        value = self.first(chain)
        if value is None or isinstance(value, bool):
            return 0
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else 0
        if isinstance(value, int):
            return value
        match = re.match(r"\s*(\d+)", str(value))
        return int(match.group(1)) if match else 0

    def keys_in_group(self, *prefixes: str) -> list[str]:
        return [k for k in self._data if isinstance(k, str) and k.startswith(prefixes)]

    def lowered_keys(self) -> tuple[str, ...]:
        if self._lowered is None:
            self._lowered = tuple(str(k).lower() for k in self._data)
        return self._lowered

    # --- semantic fields ---

    def make(self) -> str | None:
        value = self.first_str(MAKE_KEYS)
        return value or None

    def model(self) -> str | None:
        value = self.first_str(MODEL_KEYS)
        return value or None

    def capture_date(self) -> str | None:
        """Best capture date, with the EXIF offset appended when the date carries none."""
        date = self.first_str(CAPTURE_DATE_KEYS)
        if not date:
            return None
        offset = self.first_str(OFFSET_KEYS)
        if offset and not _EMBEDDED_OFFSET.search(date):
            return f"{date}{offset}"
        return date

    def has_any_date(self) -> bool:
        return self.has_any(ANY_DATE_KEYS)

    def software(self) -> str:
        return self.first_str(SOFTWARE_KEYS)

    def file_type(self) -> str:
        return self.first_str(FILE_TYPE_KEYS).lower()

    def is_jpeg(self) -> bool:
        return self.file_type() in ("jpeg", "jpg")

    def icc_description(self) -> str:
        return self.first_str(ICC_DESCRIPTION_KEYS)

    def icc_copyright(self) -> str:
        return self.first_str(ICC_COPYRIGHT_KEYS)

    def icc_vendor_fields(self) -> list[str]:
        return [str(self.get(k)) for k in ICC_VENDOR_KEYS if self.get(k) is not None]
