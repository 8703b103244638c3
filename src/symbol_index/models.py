"""Symbol records produced by the extraction pipeline.

The extractor itself lives outside this package; these records are the
contract it hands over. Each record carries the file it came from and the
fully-qualified name of the symbol.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config.logging import get_logger

logger = get_logger(__name__)

_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class FileCheck:
    """Reference to an analyzed file, with the modification time seen."""

    path: str
    timestamp: Optional[float] = None

    @property
    def uri(self) -> str:
        return file_uri(self.path)


FileRef = Union[FileCheck, Path, str]


def file_uri(ref: FileRef) -> str:
    """Normalize a file reference to the URI used as the deletion key.

    Strings that already carry a scheme (``file:``, ``jar:``) are kept
    verbatim; anything else is treated as a local path.
    """
    if isinstance(ref, FileCheck):
        return ref.uri
    if isinstance(ref, str) and len(ref) > 2 and _URI_SCHEME.match(ref):
        return ref
    return Path(ref).absolute().as_uri()


class SymbolKind(str, Enum):
    """Kinds of symbol record accepted from the extractor."""

    CLASS = "class"
    METHOD = "method"
    FIELD = "field"
    TYPE_ALIAS = "type_alias"


@dataclass(frozen=True)
class ClassSymbolInfo:
    """A class, trait or object.

    ``synthetic`` marks compiler-generated classes; those are only worth
    indexing when decompiled metadata exists for them.
    """

    file: FileCheck
    fqn: str
    synthetic: bool = False
    has_decompiled_metadata: bool = False

    @property
    def indexable(self) -> bool:
        return not self.synthetic or self.has_decompiled_metadata


@dataclass(frozen=True)
class MethodSymbolInfo:
    file: FileCheck
    fqn: str


@dataclass(frozen=True)
class FieldSymbolInfo:
    file: FileCheck
    fqn: str


@dataclass(frozen=True)
class TypeAliasSymbolInfo:
    file: FileCheck
    fqn: str


SourceSymbolInfo = Union[
    ClassSymbolInfo, MethodSymbolInfo, FieldSymbolInfo, TypeAliasSymbolInfo
]


def symbol_from_dict(data: Dict[str, Any]) -> SourceSymbolInfo:
    """Build a symbol record from its JSON representation.

    Raises:
        ValueError: If the record has an unknown kind or misses a key
    """
    if not isinstance(data, dict):
        raise ValueError(f"Symbol record must be an object, got {data!r}")
    try:
        kind = SymbolKind(data["kind"])
        file = FileCheck(str(data["file"]), data.get("timestamp"))
        fqn = str(data["fqn"])
    except KeyError as e:
        raise ValueError(f"Symbol record is missing {e}") from e

    if kind is SymbolKind.CLASS:
        return ClassSymbolInfo(
            file,
            fqn,
            synthetic=bool(data.get("synthetic", False)),
            has_decompiled_metadata=bool(
                data.get("has_decompiled_metadata", False)
            ),
        )
    if kind is SymbolKind.METHOD:
        return MethodSymbolInfo(file, fqn)
    if kind is SymbolKind.FIELD:
        return FieldSymbolInfo(file, fqn)
    return TypeAliasSymbolInfo(file, fqn)


def load_symbols(path: Union[str, Path]) -> List[SourceSymbolInfo]:
    """Read a JSON-lines symbol dump, one record per line.

    Blank lines are ignored. Malformed lines are logged and skipped so one
    bad record does not drop a whole file from the index.
    """
    symbols: List[SourceSymbolInfo] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                symbols.append(symbol_from_dict(json.loads(line)))
            except ValueError as e:
                # json.JSONDecodeError is a ValueError too
                logger.warning(
                    "Skipping malformed symbol record",
                    path=str(path),
                    line=lineno,
                    error=str(e),
                )
    return symbols
