"""Tests for track loading, scanning and activity filtering."""

import struct
import zipfile
from datetime import date, datetime, timedelta, timezone
from io import BytesIO

import pytest

from rainbow_roads.errors import EmptyInputError
from rainbow_roads.tracks import (
    Activity,
    ActivityFilter,
    GeoPoint,
    InputPathError,
    Region,
    TrackParseError,
    TrackPoint,
    haversine_distance,
    load_activities,
    parse_distance,
    parse_duration,
    parse_fit,
    parse_gpx,
    parse_raw,
    parse_tcx,
    parse_timestamp,
    scan_inputs,
)

GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <type>running</type>
    <trkseg>
      <trkpt lat="51.5000" lon="-0.1200"><time>2024-05-01T08:00:00Z</time></trkpt>
      <trkpt lat="51.5010" lon="-0.1190"><time>2024-05-01T08:01:00Z</time></trkpt>
      <trkpt lat="51.5020" lon="-0.1180"></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="51.5030" lon="-0.1170"><time>2024-05-01T08:03:00Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""

TCX = b"""<?xml version="1.0" encoding="UTF-8"?>
<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2">
  <Activities>
    <Activity Sport="Biking">
      <Lap>
        <Track>
          <Trackpoint>
            <Time>2024-06-02T10:00:00.000Z</Time>
            <Position><LatitudeDegrees>40.0</LatitudeDegrees><LongitudeDegrees>-74.0</LongitudeDegrees></Position>
          </Trackpoint>
          <Trackpoint><Time>2024-06-02T10:00:30.000Z</Time></Trackpoint>
          <Trackpoint>
            <Time>2024-06-02T10:10:00.000Z</Time>
            <Position><LatitudeDegrees>40.01</LatitudeDegrees><LongitudeDegrees>-74.01</LongitudeDegrees></Position>
          </Trackpoint>
        </Track>
      </Lap>
    </Activity>
  </Activities>
</TrainingCenterDatabase>
"""

RAW = b"""[
  {"sport": "walking", "points": [["2024-07-03T07:00:00+00:00", 1.0, 2.0], ["2024-07-03T07:30:00+00:00", 1.01, 2.02]]}
]"""

FIT_EPOCH = datetime(1989, 12, 31, tzinfo=timezone.utc)
FIT_START = datetime(2024, 8, 4, 6, 0, tzinfo=timezone.utc)

_FIT_CRC_TABLE = (
    0x0000, 0xCC01, 0xD801, 0x1400, 0xF001, 0x3C00, 0x2800, 0xE401,
    0xA001, 0x6C00, 0x7800, 0xB401, 0x5000, 0x9C01, 0x8801, 0x4400,
)


def fit_crc(data: bytes) -> int:
    crc = 0
    for byte in data:
        for nibble in (byte & 0xF, byte >> 4):
            tmp = _FIT_CRC_TABLE[crc & 0xF]
            crc = (crc >> 4) & 0x0FFF
            crc = crc ^ tmp ^ _FIT_CRC_TABLE[nibble]
    return crc


def semicircles(degrees: float) -> int:
    return round(degrees * 2**31 / 180)


def build_fit(samples: list[tuple[int, float | None, float | None]], sport: int = 1) -> bytes:
    """
    Encode a minimal FIT activity: a ``sport`` message and one ``record`` per sample.

    Samples are ``(seconds, lat, lon)``; a ``None`` coordinate is written as the
    FIT invalid value, which decoders report as missing.
    """
    data = bytearray()
    # Local type 0: sport message (global 12), field 0 enum
    data += struct.pack("<BBBHB", 0x40, 0, 0, 12, 1) + bytes((0, 1, 0x00))
    data += struct.pack("<BB", 0x00, sport)
    # Local type 1: record message (global 20), timestamp uint32, lat and lon sint32
    data += struct.pack("<BBBHB", 0x41, 0, 0, 20, 3) + bytes((253, 4, 0x86, 0, 4, 0x85, 1, 4, 0x85))
    base = int((FIT_START - FIT_EPOCH).total_seconds())
    for seconds, lat, lon in samples:
        data += struct.pack(
            "<BIii",
            0x01,
            base + seconds,
            0x7FFFFFFF if lat is None else semicircles(lat),
            0x7FFFFFFF if lon is None else semicircles(lon),
        )
    header = struct.pack("<BBHI4sH", 14, 0x10, 2093, len(data), b".FIT", 0)
    body = header + bytes(data)
    return body + struct.pack("<H", fit_crc(body))


FIT = build_fit([(0, 48.8566, 2.3522), (30, None, None), (60, 48.8576, 2.3532), (120, 48.8586, 2.3542)])


class TestParsers:
    def test_gpx_skips_points_without_time(self) -> None:
        (act,) = parse_gpx(BytesIO(GPX), "morning.gpx")

        assert act.sport == "running"
        assert len(act) == 3
        assert act.duration == timedelta(minutes=3)
        assert act.first.lat == pytest.approx(51.5)
        assert act.source == "morning.gpx"

    def test_tcx(self) -> None:
        (act,) = parse_tcx(BytesIO(TCX), "ride.tcx")

        assert act.sport == "Biking"
        assert len(act) == 2
        assert act.duration == timedelta(minutes=10)
        assert act.distance == pytest.approx(haversine_distance(40.0, -74.0, 40.01, -74.01))

    def test_fit_records_and_sport(self) -> None:
        (act,) = parse_fit(BytesIO(FIT), "paris.fit")

        assert act.sport == "running"
        assert len(act) == 3
        assert act.duration == timedelta(minutes=2)
        assert act.start_time == FIT_START
        assert act.first.lat == pytest.approx(48.8566, abs=1e-6)
        assert act.last.lon == pytest.approx(2.3542, abs=1e-6)

    def test_fit_without_positions_yields_nothing(self) -> None:
        assert parse_fit(BytesIO(build_fit([(0, None, None)]))) == []

    def test_fit_garbage(self) -> None:
        with pytest.raises(TrackParseError, match="Invalid FIT data"):
            parse_fit(BytesIO(b"definitely not a fit file"), "junk.fit")

    def test_raw_json(self) -> None:
        (act,) = parse_raw(BytesIO(RAW), "walk.json")

        assert act.sport == "walking"
        assert act.duration == timedelta(minutes=30)
        assert (act.last.lat, act.last.lon) == (1.01, 2.02)

    def test_malformed_gpx(self) -> None:
        with pytest.raises(TrackParseError, match="Invalid GPX"):
            parse_gpx(BytesIO(b"<gpx><trk>"), "broken.gpx")

    def test_malformed_tcx(self) -> None:
        with pytest.raises(TrackParseError, match="Malformed XML"):
            parse_tcx(BytesIO(b"<TrainingCenterDatabase>"), "broken.tcx")

    def test_wrong_root_element(self) -> None:
        with pytest.raises(TrackParseError, match="not a TCX document"):
            parse_tcx(BytesIO(GPX), "ride.tcx")

    def test_bad_timestamp(self) -> None:
        data = TCX.replace(b"2024-06-02T10:10:00.000Z", b"yesterday")
        with pytest.raises(TrackParseError, match="Invalid timestamp"):
            parse_tcx(BytesIO(data), "odd.tcx")

    def test_timestamps_without_offset_are_utc(self) -> None:
        assert parse_timestamp("2024-05-02T08:00:00") == datetime(2024, 5, 2, 8, tzinfo=timezone.utc)
        assert parse_timestamp("2024-05-02T10:00:00+02:00") == datetime(2024, 5, 2, 8, tzinfo=timezone.utc)
        assert parse_timestamp("2024-05-02T08:00:00Z").tzinfo is timezone.utc

    def test_raw_requires_list(self) -> None:
        with pytest.raises(TrackParseError):
            parse_raw(BytesIO(b'{"points": []}'), "obj.json")

    def test_track_without_points_yields_nothing(self) -> None:
        data = b'<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1"><trk><trkseg/></trk></gpx>'
        assert parse_gpx(BytesIO(data)) == []


class TestActivity:
    def test_points_are_sorted_by_time(self, make_activity) -> None:
        act = make_activity([(60, 1.0, 1.0), (0, 2.0, 2.0)])
        assert [tp.lat for tp in act.points] == [2.0, 1.0]

    def test_empty_activity_is_rejected(self) -> None:
        with pytest.raises(EmptyInputError):
            Activity.from_points([])
        with pytest.raises(EmptyInputError):
            Activity(points=(), duration=timedelta())

    def test_naive_and_offset_timestamps_mix(self) -> None:
        act = Activity.from_points(
            [
                TrackPoint(datetime(2024, 5, 1, 8, 1), GeoPoint(1.0, 1.0)),
                TrackPoint(datetime(2024, 5, 1, 10, 0, tzinfo=timezone(timedelta(hours=2))), GeoPoint(2.0, 2.0)),
            ]
        )

        assert act.duration == timedelta(minutes=1)
        assert act.start_time == datetime(2024, 5, 1, 8, tzinfo=timezone.utc)
        assert all(tp.timestamp.tzinfo is timezone.utc for tp in act.points)


class TestScanner:
    def test_directory_zip_and_unknown_files(self, tmp_path) -> None:
        (tmp_path / "a.gpx").write_bytes(GPX)
        (tmp_path / "notes.txt").write_text("ignore me")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "b.TCX").write_bytes(TCX)
        with zipfile.ZipFile(tmp_path / "export.zip", "w") as archive:
            archive.writestr("activities/c.json", RAW)
            archive.writestr("activities/readme.md", "skip")

        files = scan_inputs([str(tmp_path)])

        names = sorted(f.path.replace("\\", "/").rsplit("/", 1)[-1] for f in files)
        assert names == ["a.gpx", "b.TCX", "c.json"]
        result = load_activities(files)
        assert len(result.activities) == 3
        assert result.warnings == []

    def test_glob_pattern(self, tmp_path) -> None:
        (tmp_path / "a.gpx").write_bytes(GPX)
        (tmp_path / "b.gpx").write_bytes(GPX)

        files = scan_inputs([str(tmp_path / "*.gpx")])

        assert len(files) == 2

    def test_missing_path(self, tmp_path) -> None:
        with pytest.raises(InputPathError, match="not found"):
            scan_inputs([str(tmp_path / "missing.gpx")])

    def test_pattern_without_matches(self, tmp_path) -> None:
        with pytest.raises(InputPathError, match="matched nothing"):
            scan_inputs([str(tmp_path / "*.fit")])

    def test_broken_files_become_warnings(self, tmp_path) -> None:
        (tmp_path / "good.gpx").write_bytes(GPX)
        (tmp_path / "bad.gpx").write_bytes(b"<gpx")

        result = load_activities(scan_inputs([str(tmp_path)]))

        assert len(result.activities) == 1
        assert len(result.warnings) == 1
        assert "bad.gpx" in result.warnings[0]

    def test_fit_files_and_mixed_timestamp_sources(self, tmp_path) -> None:
        (tmp_path / "a.gpx").write_bytes(GPX)
        (tmp_path / "b.FIT").write_bytes(FIT)
        (tmp_path / "c.json").write_bytes(
            b'[{"points": [["2024-05-02T08:00:00", 51.5, -0.12], ["2024-05-02T08:20:00", 51.51, -0.12]]}]'
        )

        result = load_activities(scan_inputs([str(tmp_path)]))

        assert result.warnings == []
        assert [act.sport for act in result.activities] == ["running", "running", None]
        assert min(act.start_time for act in result.activities) == datetime(2024, 5, 1, 8, tzinfo=timezone.utc)


class TestParsing:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("15m", timedelta(minutes=15)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("45s", timedelta(seconds=45)),
            ("1.5h", timedelta(minutes=90)),
            ("250ms", timedelta(milliseconds=250)),
        ],
    )
    def test_durations(self, text: str, expected: timedelta) -> None:
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "15", "m15", "1x", "1h 2q"])
    def test_invalid_durations(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(text)

    @pytest.mark.parametrize(
        "text, expected",
        [("2km", 2000.0), ("500", 500.0), ("10mi", 16093.44), ("0.5 KM", 500.0)],
    )
    def test_distances(self, text: str, expected: float) -> None:
        assert parse_distance(text) == pytest.approx(expected)

    def test_invalid_distance_unit(self) -> None:
        with pytest.raises(ValueError, match="Unknown distance unit"):
            parse_distance("3 leagues")

    def test_region(self) -> None:
        region = Region.parse("51.53,-0.21,1km")

        assert region == Region(51.53, -0.21, 1000.0)
        assert region.contains(51.531, -0.211)
        assert not region.contains(51.6, -0.21)
        assert str(region) == "51.5300,-0.2100,1.0km"

    @pytest.mark.parametrize("text", ["51.5,-0.2", "a,b,1km", "95,0,1km"])
    def test_invalid_region(self, text: str) -> None:
        with pytest.raises(ValueError):
            Region.parse(text)


class TestActivityFilter:
    def test_empty_filter_keeps_everything(self, loop_activities) -> None:
        assert ActivityFilter().apply(loop_activities) == loop_activities

    def test_sport_is_case_insensitive(self, loop_activities) -> None:
        kept = ActivityFilter(sports=("Running",)).apply(loop_activities)
        assert [act.sport for act in kept] == ["running"]

    def test_duration_and_distance_ranges(self, loop_activities) -> None:
        assert ActivityFilter(min_duration=timedelta(minutes=15)).apply(loop_activities) == [loop_activities[1]]
        assert ActivityFilter(max_duration=timedelta(minutes=15)).apply(loop_activities) == [loop_activities[0]]
        longest = max(act.distance for act in loop_activities)
        assert ActivityFilter(min_distance=longest).apply(loop_activities) == [
            act for act in loop_activities if act.distance == longest
        ]

    def test_dates(self, loop_activities) -> None:
        assert ActivityFilter(after=date(2024, 5, 2)).apply(loop_activities) == []
        assert ActivityFilter(before=date(2024, 5, 1)).apply(loop_activities) == loop_activities

    def test_regions(self, loop_activities) -> None:
        short, long = loop_activities
        assert ActivityFilter(starts_near=Region(51.500, -0.120, 50)).apply(loop_activities) == [short]
        assert ActivityFilter(ends_near=Region(51.501, -0.116, 50)).apply(loop_activities) == [long]
        assert ActivityFilter(passes_through=Region(51.505, -0.121, 50)).apply(loop_activities) == [long]
        assert ActivityFilter(bounded_by=Region(51.502, -0.120, 300)).apply(loop_activities) == [short]
