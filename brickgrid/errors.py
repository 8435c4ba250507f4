"""Error taxonomy for level and material content.

Every failure raised while loading, resolving or validating content derives
from ContentError. Errors carry the offending level number and/or profile
reference as attributes so callers can report them without parsing messages.
"""
from __future__ import annotations
from typing import Optional, Sequence, Tuple

__all__ = [
    "ContentError",
    "InvalidDimensions",
    "IndexOutOfBounds",
    "DuplicateProfileId",
    "InvalidProfileReference",
    "ManifestFrozen",
    "ResolutionError",
    "UnknownProfile",
    "UnresolvedProfile",
    "CyclicFallbackChain",
    "DimensionMismatch",
    "DuplicateLevelNumber",
    "InvalidLevelNumber",
    "PresentationLevelMismatch",
    "UnknownLevelNumber",
    "NoDefaultProfile",
    "InvalidCellToken",
    "MalformedContent",
]


class ContentError(Exception):
    """Base class for every level/manifest content failure."""
    pass


class InvalidDimensions(ContentError):
    def __init__(self, width, height, plane_width=None, plane_height=None):
        self.width = width
        self.height = height
        self.plane_width = plane_width
        self.plane_height = plane_height
        msg = f"Invalid grid dimensions {width}x{height}"
        if plane_width is not None or plane_height is not None:
            msg += f" on plane {plane_width}x{plane_height}"
        super().__init__(msg)


class IndexOutOfBounds(ContentError):
    def __init__(self, row: int, col: int, width: int, height: int):
        self.row = row
        self.col = col
        self.width = width
        self.height = height
        super().__init__(f"Cell ({row}, {col}) outside grid {width}x{height}")


class DuplicateProfileId(ContentError):
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Duplicate profile id '{profile_id}'")


class InvalidProfileReference(ContentError):
    def __init__(self, profile_id: str, reference):
        self.profile_id = profile_id
        self.reference = reference
        super().__init__(f"Profile '{profile_id}' has invalid fallback reference {reference!r}")


class ManifestFrozen(ContentError):
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Cannot insert '{profile_id}': manifest is read-only once published")


class ResolutionError(ContentError):
    """Profile resolution failure.

    When raised during level validation the validator fills in
    ``level_number`` and ``slot`` (e.g. ``ground_profile``) before re-raising.
    """

    level_number: Optional[int] = None
    slot: Optional[str] = None

    def annotate(self, level_number: Optional[int] = None, slot: Optional[str] = None) -> "ResolutionError":
        self.level_number = level_number
        self.slot = slot
        return self

    def __str__(self) -> str:
        base = super().__str__()
        if self.level_number is None and self.slot is None:
            return base
        where = []
        if self.level_number is not None:
            where.append(f"level {self.level_number}")
        if self.slot:
            where.append(self.slot)
        return f"{base} ({', '.join(where)})"


class UnknownProfile(ResolutionError):
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Unknown profile '{profile_id}'")


class UnresolvedProfile(ResolutionError):
    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Profile '{profile_id}' has no albedo and no resolvable fallback")


class CyclicFallbackChain(ResolutionError):
    def __init__(self, path: Sequence[str]):
        self.path: Tuple[str, ...] = tuple(path)
        self.profile_id = self.path[0] if self.path else ""
        super().__init__("Cyclic fallback chain: " + " -> ".join(self.path))


class DimensionMismatch(ContentError):
    def __init__(self, level_number: int, expected: Tuple[int, int], rows: int, row_index: Optional[int] = None, row_length: Optional[int] = None):
        self.level_number = level_number
        self.expected = expected
        self.rows = rows
        self.row_index = row_index
        self.row_length = row_length
        width, height = expected
        if row_index is None:
            detail = f"{rows} rows"
        else:
            detail = f"row {row_index} has {row_length} cells"
        super().__init__(f"Level {level_number} matrix must be {width}x{height}; {detail}")


class DuplicateLevelNumber(ContentError):
    def __init__(self, level_number: int, source: str = "level set"):
        self.level_number = level_number
        self.source = source
        super().__init__(f"Level number {level_number} declared more than once in {source}")


class InvalidLevelNumber(ContentError):
    def __init__(self, level_number):
        self.level_number = level_number
        super().__init__(f"Level number must be a positive integer, got {level_number!r}")


class PresentationLevelMismatch(ContentError):
    def __init__(self, level_number: int, presentation_level: int):
        self.level_number = level_number
        self.presentation_level = presentation_level
        super().__init__(
            f"Level {level_number} presentation declares level_number {presentation_level}"
        )


class UnknownLevelNumber(ContentError):
    def __init__(self, level_number: int, source: str):
        self.level_number = level_number
        self.source = source
        super().__init__(f"{source} references unknown level {level_number}")


class NoDefaultProfile(ContentError):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No directly resolvable profile in required category '{category}'")


class InvalidCellToken(ContentError):
    def __init__(self, token, row: int, col: int, level_number: Optional[int] = None):
        self.token = token
        self.row = row
        self.col = col
        self.level_number = level_number
        where = f"level {level_number} " if level_number is not None else ""
        super().__init__(f"Unsupported cell value {token!r} at {where}({row},{col})")


class MalformedContent(ContentError):
    """A level or manifest document that cannot be parsed into the model."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
