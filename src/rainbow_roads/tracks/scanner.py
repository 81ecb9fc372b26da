"""Input discovery: files, directories, glob patterns and zip archives."""

import glob
import zipfile
from dataclasses import dataclass, field
from functools import partial
from io import BytesIO
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, Sequence

from .activity import Activity
from .fit_tracks import parse_fit
from .gpx_tracks import parse_gpx
from .parsing import TrackParseError
from .raw import parse_raw
from .tcx_tracks import parse_tcx

Parser = Callable[[IO[bytes], str], list[Activity]]

PARSERS: dict[str, Parser] = {
    ".fit": parse_fit,
    ".gpx": parse_gpx,
    ".tcx": parse_tcx,
    ".json": parse_raw,
}


class InputPathError(Exception):
    """Raised when an input path or pattern cannot be resolved."""
    pass


@dataclass(frozen=True)
class TrackFile:
    """A discovered track file and the parser that understands it."""
    path: str
    parser: Parser
    opener: Callable[[], IO[bytes]] = field(compare=False)

    def parse(self) -> list[Activity]:
        with self.opener() as f:
            return self.parser(f, self.path)


@dataclass
class LoadResult:
    activities: list[Activity] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def scan_inputs(inputs: Sequence[str]) -> list[TrackFile]:
    """
    Resolve input arguments into track files.

    Args:
        inputs: Files, directories, glob patterns or zip archives; ``.`` when empty

    Returns:
        Track files in discovery order

    Raises:
        InputPathError: If a path does not exist or a pattern matches nothing
    """
    files: list[TrackFile] = []
    for entry in inputs or ["."]:
        if any(ch in entry for ch in "*?["):
            matches = sorted(glob.glob(entry, recursive=True))
            if not matches:
                raise InputPathError(f"Input pattern {entry!r} matched nothing")
            paths = [Path(match) for match in matches]
        else:
            paths = [Path(entry)]

        for path in paths:
            if not path.exists():
                raise InputPathError(f"Input path {str(path)!r} not found")
            files.extend(_scan_path(path))
    return files


def load_activities(files: Iterable[TrackFile]) -> LoadResult:
    """Parse every file, collecting unreadable ones as warnings instead of failing."""
    result = LoadResult()
    for track_file in files:
        try:
            result.activities.extend(track_file.parse())
        except (TrackParseError, OSError, UnicodeDecodeError) as e:
            result.warnings.append(f"{track_file.path}: {e}")
    return result


def _scan_path(path: Path) -> Iterator[TrackFile]:
    if path.is_dir():
        for child in sorted(path.rglob("*")):
            if child.is_file():
                yield from _scan_file(child)
    else:
        yield from _scan_file(path)


def _scan_file(path: Path) -> Iterator[TrackFile]:
    ext = path.suffix.lower()
    if ext == ".zip":
        yield from _scan_zip(path)
        return
    parser = PARSERS.get(ext)
    if parser is not None:
        yield TrackFile(str(path), parser, partial(open, path, "rb"))


def _scan_zip(path: Path) -> Iterator[TrackFile]:
    """Yield track members of an archive; nested archives are not traversed."""
    try:
        with zipfile.ZipFile(path) as archive:
            members = [
                (info.filename, archive.read(info))
                for info in archive.infolist()
                if not info.is_dir() and Path(info.filename).suffix.lower() in PARSERS
            ]
    except zipfile.BadZipFile as e:
        raise InputPathError(f"Archive {str(path)!r} is not readable: {e}") from e

    for filename, data in members:
        parser = PARSERS[Path(filename).suffix.lower()]
        yield TrackFile(f"{path}/{filename}", parser, partial(BytesIO, data))
