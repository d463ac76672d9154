"""Tests for the metadata accessor."""

from metascan.core.accessor import CAPTURE_DATE_KEYS, MetadataAccessor


class TestLookupChains:
    def test_namespaced_key_wins_over_flat(self):
        meta = MetadataAccessor({"Make": "Flat", "EXIF:Make": "Canon"})
        assert meta.make() == "Canon"

    def test_flat_key_fallback(self):
        meta = MetadataAccessor({"Model": "EOS 5D"})
        assert meta.model() == "EOS 5D"

    def test_blank_values_are_absent(self):
        meta = MetadataAccessor({"EXIF:Make": "   ", "IFD0:Make": "Nikon"})
        assert meta.make() == "Nikon"
        assert MetadataAccessor({"EXIF:Make": ""}).make() is None

    def test_first_with_key(self):
        meta = MetadataAccessor({"EXIF:CreateDate": "2024:01:01 10:00:00"})
        key, value = meta.first_with_key(CAPTURE_DATE_KEYS)
        assert key == "EXIF:CreateDate"
        assert value == "2024:01:01 10:00:00"

    def test_as_int(self):
        meta = MetadataAccessor({"File:ImageWidth": "4000 px", "File:ImageHeight": "n/a", "ImageWidth": True})
        assert meta.as_int(("File:ImageWidth",)) == 4000
        assert meta.as_int(("File:ImageHeight",)) == 0
        assert meta.as_int(("ImageWidth",)) == 0
        assert meta.as_int(("Missing",)) == 0

    def test_as_int_non_finite(self):
        for value in (float("nan"), float("inf"), float("-inf")):
            assert MetadataAccessor({"File:ImageWidth": value}).as_int(("File:ImageWidth",)) == 0
        assert MetadataAccessor({"File:ImageWidth": 1600.0}).as_int(("File:ImageWidth",)) == 1600


class TestSemanticFields:
    def test_capture_date_appends_offset(self):
        meta = MetadataAccessor({"EXIF:DateTimeOriginal": "2024:01:01 10:00:00", "EXIF:OffsetTimeOriginal": "+02:00"})
        assert meta.capture_date() == "2024:01:01 10:00:00+02:00"

    def test_capture_date_keeps_embedded_offset(self):
        meta = MetadataAccessor(
            {"Composite:SubSecDateTimeOriginal": "2024:01:01 10:00:00.12+01:00", "EXIF:OffsetTime": "+02:00"}
        )
        assert meta.capture_date() == "2024:01:01 10:00:00.12+01:00"

    def test_has_any_date_includes_xmp(self):
        assert MetadataAccessor({"XMP-xmp:CreateDate": "2024:01:01"}).has_any_date()
        assert not MetadataAccessor({}).has_any_date()

    def test_is_jpeg(self):
        assert MetadataAccessor({"File:FileType": "JPEG"}).is_jpeg()
        assert not MetadataAccessor({"File:FileType": "PNG"}).is_jpeg()

    def test_lowered_keys(self):
        meta = MetadataAccessor({"JUMBF:JUMDLabel": "c2pa", "C2PA:Manifest": "x"})
        assert meta.lowered_keys() == ("jumbf:jumdlabel", "c2pa:manifest")

    def test_wrap_is_idempotent(self):
        meta = MetadataAccessor({})
        assert MetadataAccessor.wrap(meta) is meta
