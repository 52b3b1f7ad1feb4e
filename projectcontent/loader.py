# projectcontent/loader.py

"""
File reading primitives used by the scanner and the assemblers.

- :func:`read_json` is the strict metadata reader: it propagates failures.
- :func:`load_content_file` and :func:`load_optional_file` are the tolerant
  content loaders: they never raise and degrade to an empty string.
"""


from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from projectcontent.errors import DegradedContentWarning


@dataclass(frozen=True)
class ScanOptions:
    """
    Settings shared by every step of one aggregation run.

    Parameters
    ----------
    encoding : str, default="utf-8"
        Text encoding used for every file read.
    logger : logging.Logger
        Sink for skipped entities and degraded content. Defaults to the
        ``projectcontent`` logger.
    """

    encoding: str = "utf-8"
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("projectcontent")
    )

    @classmethod
    def create(
        cls, *, encoding: str = "utf-8", logger: logging.Logger | None = None
    ) -> ScanOptions:
        """
        Build options from the public keyword arguments.

        A ``logger`` of ``None`` selects the default ``projectcontent`` logger.
        """

        if logger is None:
            return cls(encoding=encoding)
        return cls(encoding=encoding, logger=logger)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """
    Read and parse a JSON file.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected: they are accepted by
    :func:`json.loads` but are not JSON.

    Parameters
    ----------
    path : pathlib.Path
        File to read.
    encoding : str, default="utf-8"
        Text encoding used to decode the file.

    Returns
    -------
    Any
        The parsed JSON value.

    Raises
    ------
    OSError
        If the file is missing or cannot be read.
    ValueError
        If the path is invalid (e.g. contains a NUL byte), the file cannot be
        decoded using ``encoding`` (``UnicodeDecodeError``) or is not valid
        JSON (``json.JSONDecodeError``).
    """

    return json.loads(
        path.read_text(encoding=encoding), parse_constant=_reject_constant
    )


def _is_array_index(key: str) -> bool:
    return (
        key.isascii()
        and key.isdigit()
        and (key == "0" or not key.startswith("0"))
        and int(key) < 2**32 - 1
    )


def _number_to_js(value: float) -> str:
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digits, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digits))
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    e = n - 1
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def stringify_json(value: Any) -> str:
    """
    Serialize a parsed JSON value the way ``JSON.stringify`` does.

    Output is compact, non-ASCII text is kept as is, and numbers use the
    JavaScript number formatting: integral floats have no fraction
    (``1`` not ``1.0``), exponents are unpadded (``1e-7``), and integers
    beyond double precision are rounded. Object keys that are array indices
    come first in ascending order, the others keep their insertion order.

    Parameters
    ----------
    value : Any
        Value produced by :func:`read_json`.

    Returns
    -------
    str
        Compact JSON text.
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 2**53:
            return str(value)
        try:
            return _number_to_js(float(value))
        except OverflowError:
            return "null"
    if isinstance(value, float):
        return _number_to_js(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        return "[" + ",".join(stringify_json(item) for item in value) + "]"
    if isinstance(value, dict):
        indices = sorted((k for k in value if _is_array_index(k)), key=int)
        others = [k for k in value if not _is_array_index(k)]
        return (
            "{"
            + ",".join(
                f"{json.dumps(k, ensure_ascii=False)}:{stringify_json(value[k])}"
                for k in indices + others
            )
            + "}"
        )
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def metadata_value(metadata: Any, key: str) -> Any:
    """Return ``metadata[key]`` for JSON objects, ``None`` otherwise."""

    if isinstance(metadata, dict):
        return metadata.get(key)
    return None


def owner_name(directory: Path, metadata: Any) -> str:
    """Name used to identify an entity in log entries."""

    return str(metadata_value(metadata, "name") or directory)


def load_content_file(
    directory: Path,
    relative_path: Any,
    *,
    kind: str,
    metadata: Any = None,
    options: ScanOptions | None = None,
) -> str:
    """
    Return the raw text of a file referenced by an entity's metadata.

    An empty ``relative_path`` yields ``""`` without touching the filesystem.
    A file that cannot be read yields ``""`` and one ERROR log entry naming
    the owning entity and the missing path. The contents are returned as
    read, without trimming.

    Parameters
    ----------
    directory : pathlib.Path
        Entity directory the path is resolved against.
    relative_path : Any
        Value of the metadata path field.
    kind : str
        Entity kind label used in the log entry (e.g. ``"fragment"``).
    metadata : Any, optional
        Parsed entity metadata; its ``name`` identifies the owner when set.
    options : ScanOptions, optional
        Encoding and log sink.

    Returns
    -------
    str
        File contents, or ``""``.
    """

    if not relative_path:
        return ""
    options = options or ScanOptions()

    if isinstance(relative_path, str):
        try:
            return (directory / relative_path).read_text(encoding=options.encoding)
        except (OSError, ValueError):
            pass

    issue = DegradedContentWarning(kind, owner_name(directory, metadata), relative_path)
    options.logger.error("%s", issue, extra={"issue": issue})
    return ""


def load_optional_file(
    directory: Path,
    relative_path: Any,
    *,
    kind: str,
    metadata: Any = None,
    options: ScanOptions | None = None,
) -> str:
    """
    Like :func:`load_content_file`, but only attempted if the file exists.

    A missing file is not an error here, so nothing is logged for it.
    """

    if not relative_path or not isinstance(relative_path, str):
        return ""
    if not (directory / relative_path).exists():
        return ""
    return load_content_file(
        directory, relative_path, kind=kind, metadata=metadata, options=options
    )
