"""On-disk representation of shape databases.

A database file is a pickle of a document made only of builtin types:

    {
        "format": "glyphmatcher.shapedb",
        "version": 1,
        "entries": [(label, [[(x, y), ...], ...]), ...],
        "points": [((x, y), [entry_idx, ...]), ...],
    }

Loading refuses any pickled global, so a database file cannot construct
arbitrary objects, and the decoded document is validated with pydantic
before a ShapeDb is rebuilt from it. Labels therefore have to be builtin
values (strings in practice).
"""

import io
import pickle
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from glyphmatcher.core.shapedb import COORD_MAX, ShapeDb
from glyphmatcher.exceptions import DatabaseCorruptError, DatabaseWriteError

FORMAT_NAME = "glyphmatcher.shapedb"
FORMAT_VERSION = 1

Coord = Annotated[int, Field(ge=0, le=COORD_MAX)]
GridPoint = tuple[Coord, Coord]


class ShapeDbDocument(BaseModel):
    """Validated form of a decoded database file.

    Validation is strict: values of the wrong type are rejected rather than
    coerced.
    """

    model_config = ConfigDict(strict=True)

    format: Literal["glyphmatcher.shapedb"]
    version: int
    entries: list[tuple[Any, list[list[GridPoint]]]]
    points: list[tuple[GridPoint, list[int]]]

    @model_validator(mode="after")
    def check_index(self) -> "ShapeDbDocument":
        """Check that the point index matches the stored entries.

        Index lists must be non-empty and refer to existing entries, and every
        point of every entry must be indexed under that entry.
        """
        if self.version != FORMAT_VERSION:
            raise ValueError(f"unsupported format version {self.version}")
        n = len(self.entries)
        for point, indices in self.points:
            if not indices:
                raise ValueError(f"empty index list for point {point}")
            if any(not 0 <= i < n for i in indices):
                raise ValueError(f"index out of range for point {point}")
        index = {point: set(indices) for point, indices in self.points}
        for idx, (label, contours) in enumerate(self.entries):
            for contour in contours:
                for point in contour:
                    if idx not in index.get(point, ()):
                        raise ValueError(f"point {point} of entry {idx} ({label!r}) is not indexed")
        return self


class _BuiltinsUnpickler(pickle.Unpickler):
    def find_class(self, module: str, name: str) -> Any:
        raise pickle.UnpicklingError(f"global '{module}.{name}' is not allowed")


def dumps(db: ShapeDb) -> bytes:
    """Serialize a database.

    Args:
        db: Database to serialize

    Returns:
        Encoded database file contents
    """
    document = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "entries": [
            (label, [sorted(signature) for signature in signatures])
            for label, signatures in db.entries
        ],
        "points": sorted((key, list(indices)) for key, indices in db.points.items()),
    }
    return pickle.dumps(document, protocol=pickle.HIGHEST_PROTOCOL)


def loads(data: bytes, path: str = "<bytes>") -> ShapeDb:
    """Deserialize a database.

    Args:
        data: Encoded database file contents
        path: Name used in error messages

    Returns:
        Frozen ShapeDb

    Raises:
        DatabaseCorruptError: If the data is not a valid database of this version
    """
    try:
        raw = _BuiltinsUnpickler(io.BytesIO(data)).load()
        document = ShapeDbDocument.model_validate(raw)
    except ValidationError as e:
        raise DatabaseCorruptError(path, f"invalid structure ({e.error_count()} errors)") from e
    except Exception as e:
        raise DatabaseCorruptError(path, str(e) or type(e).__name__) from e

    db: ShapeDb = ShapeDb()
    db.entries = [
        (label, tuple(frozenset(contour) for contour in contours))
        for label, contours in document.entries
    ]
    db.points = {point: indices for point, indices in document.points}
    return db.freeze()


def write_db(path: Path, db: ShapeDb) -> None:
    """Write a database file.

    Raises:
        DatabaseWriteError: If the file cannot be written
    """
    try:
        path.write_bytes(dumps(db))
    except OSError as e:
        raise DatabaseWriteError(str(path), str(e)) from e


def read_db(path: Path) -> ShapeDb:
    """Read a database file.

    Raises:
        OSError: If the file cannot be read
        DatabaseCorruptError: If the file cannot be decoded
    """
    return loads(path.read_bytes(), str(path))
