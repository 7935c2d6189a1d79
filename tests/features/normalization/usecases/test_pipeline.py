"""
Summary: Tests for the per-file normalization pipeline.
Why: Cover step ordering, option interactions, idempotence and the end-to-end fallback path.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from tagmend.features.normalization.domain.encoding_repair import DOUBLE_ENCODED_LABEL
from tagmend.features.normalization.domain.events import ChangeKind
from tagmend.features.normalization.domain.fallback import FallbackContext
from tagmend.features.normalization.usecases.pipeline import (
    NormalizationPipeline,
    normalize,
    normalize_record,
)
from tagmend.features.normalization.usecases.processing_types import NormalizationOptions
from tagmend.shared.media_record import MediaRecord, TagField

DETECT_TARGET = "tagmend.features.normalization.domain.encoding_repair.chardet.detect"


def _record(title: str = "", artist: str = "", album: str = "", name: str = "track.mp3") -> MediaRecord:
    return MediaRecord(
        path=Path("/music") / name,
        relative_path=Path(name),
        title=title,
        artist=artist,
        album=album,
    )


def _kinds(result_events: tuple, tag_field: TagField) -> list[ChangeKind]:
    return [event.kind for event in result_events if event.field is tag_field]


def test_end_to_end_gbk_title_with_force_all(mocker: MockerFixture) -> None:
    _ = mocker.patch(
        DETECT_TARGET,
        return_value={"encoding": "GB2312", "confidence": 0.99, "language": "Chinese"},
    )
    garbled = "中文歌曲".encode("gbk").decode("latin-1")
    record = _record(title=garbled, name="MyAlbum_ArtistName/1 song.mp3")

    result = normalize(
        record,
        NormalizationOptions(force=True, force_all=True),
        "1 song",
        "MyAlbum_ArtistName",
    )

    assert result.record.album == "MyAlbum_ArtistName"
    assert result.record.artist == "MyAlbum"
    assert result.record.title == "01 song"
    assert _kinds(result.events, TagField.TITLE) == [
        ChangeKind.ENCODING_FIXED,
        ChangeKind.FALLBACK_FILLED,
    ]
    assert result.events[0].detail == "GB2312"


def test_gbk_title_read_as_latin1_is_repaired_by_real_detector() -> None:
    garbled = "中文歌曲".encode("gbk").decode("latin-1")
    record = _record(title=garbled, artist="Artist", album="Album", name="Album/song.mp3")

    result = normalize(record, NormalizationOptions(), "song", "Album")

    assert result.record.title == "中文歌曲"
    [event] = result.events_for(TagField.TITLE)
    assert event.kind is ChangeKind.ENCODING_FIXED
    assert event.old_value == garbled
    assert event.detail.upper() in {"GB2312", "GBK", "GB18030"}


def test_input_record_is_not_modified() -> None:
    record = _record(title="1 Song www.site.com")

    result = normalize(record, NormalizationOptions(), "x", "Album")

    assert record.title == "1 Song www.site.com"
    assert result.record is not record


def test_clean_record_produces_no_events() -> None:
    record = _record(title="My Song", artist="Real", album="Real Album")

    result = normalize(record, NormalizationOptions(), "3 other", "Dir_X")

    assert result.events == ()
    assert result.changed is False
    assert result.record == record


def test_force_alone_does_not_overwrite() -> None:
    record = _record(title="My Song", artist="Real", album="Real Album")

    result = normalize(record, NormalizationOptions(force=True), "3 other", "Dir_X")

    assert result.events == ()


def test_force_all_overwrites_every_field() -> None:
    record = _record(title="My Song", artist="Real", album="Real Album")

    result = normalize(record, NormalizationOptions(force=True, force_all=True), "other 3", "Dir_X")

    assert (result.record.title, result.record.artist, result.record.album) == (
        "03 other",
        "Dir",
        "Dir_X",
    )
    assert all(event.kind is ChangeKind.FALLBACK_FILLED for event in result.events)
    assert [event.detail for event in result.events] == ["filename", "directory", "directory"]


def test_force_all_alone_does_not_overwrite() -> None:
    record = _record(title="My Song", artist="Real", album="Real Album")

    result = normalize(record, NormalizationOptions(force_all=True), "3 other", "Dir_X")

    assert result.events == ()


def test_encoding_only_suppresses_unconditional_overwrite() -> None:
    record = _record(title="My Song", artist="Real", album="Real Album")
    options = NormalizationOptions(force=True, force_all=True, update_encoding_only=True)

    assert options.unconditional_overwrite is False
    assert normalize(record, options, "3 other", "Dir_X").events == ()


def test_encoding_only_still_replaces_garbled_title() -> None:
    record = _record(title="????", artist="Real", album="Real Album")

    result = normalize(record, NormalizationOptions(update_encoding_only=True), "Foo 5", "Dir")

    assert result.record.title == "05 Foo"
    assert result.has(TagField.TITLE, ChangeKind.FALLBACK_FILLED)


def test_empty_fields_fall_back_without_force() -> None:
    record = _record(title="Kept")

    result = normalize(record, NormalizationOptions(), "x", "Album_Artist")

    assert result.record.title == "Kept"
    assert result.record.artist == "Album"
    assert result.record.album == "Album_Artist"
    assert [event.field for event in result.events] == [TagField.ARTIST, TagField.ALBUM]


def test_title_is_zero_padded() -> None:
    result = normalize(_record(title="1 Song", artist="A", album="B"), NormalizationOptions(), "x", "B")

    assert result.record.title == "01 Song"
    assert _kinds(result.events, TagField.TITLE) == [ChangeKind.ZERO_PADDED]


def test_encoding_only_skips_zero_padding() -> None:
    options = NormalizationOptions(update_encoding_only=True)

    result = normalize(_record(title="1 Song", artist="A", album="B"), options, "x", "B")

    assert result.record.title == "1 Song"
    assert result.events == ()


def test_cleanup_event() -> None:
    result = normalize(
        _record(title="Song www.site.com", artist="A", album="B"), NormalizationOptions(), "x", "B"
    )

    assert result.record.title == "Song"
    assert _kinds(result.events, TagField.TITLE) == [ChangeKind.CLEANED]


def test_cleanup_to_empty_triggers_fallback() -> None:
    result = normalize(
        _record(title="Track 01", artist="A", album="B"), NormalizationOptions(), "Intro 2", "B"
    )

    assert result.record.title == "02 Intro"
    assert _kinds(result.events, TagField.TITLE) == [ChangeKind.CLEANED, ChangeKind.FALLBACK_FILLED]


def test_double_encoded_artist_is_repaired() -> None:
    garbled = "周杰伦".encode("utf-8").decode("latin-1")

    result = normalize(_record(title="Song", artist=garbled, album="B"), NormalizationOptions(), "x", "B")

    assert result.record.artist == "周杰伦"
    [event] = result.events_for(TagField.ARTIST)
    assert event.kind is ChangeKind.ENCODING_FIXED
    assert event.detail == DOUBLE_ENCODED_LABEL


def test_no_derivation_keeps_field() -> None:
    result = normalize_record(_record(), NormalizationOptions(), FallbackContext(stem="", directory=""))

    assert result.events == ()
    assert result.record.title == ""


def test_events_follow_field_order() -> None:
    result = normalize(_record(), NormalizationOptions(), "Song 1", "Alb_Art")

    assert [event.field for event in result.events] == [
        TagField.TITLE,
        TagField.ARTIST,
        TagField.ALBUM,
    ]


@pytest.mark.parametrize(
    "options",
    [
        NormalizationOptions(),
        NormalizationOptions(force=True),
        NormalizationOptions(update_encoding_only=True),
    ],
)
def test_second_pass_is_idempotent(options: NormalizationOptions) -> None:
    record = _record(title="1 Song www.x.com")
    first = normalize(record, options, "x", "Alb_Art")

    second = normalize(first.record, options, "x", "Alb_Art")

    assert first.changed is True
    assert second.events == ()
    assert second.record == first.record


def test_pipeline_uses_record_path() -> None:
    pipeline = NormalizationPipeline(NormalizationOptions())
    record = _record(name="Best_Band/Song 7.mp3")

    result = pipeline.run_for_path(record)

    assert (result.record.title, result.record.artist, result.record.album) == (
        "07 Song",
        "Best",
        "Best_Band",
    )
