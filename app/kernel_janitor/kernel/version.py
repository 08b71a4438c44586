"""Kernel version identifiers parsed from artifact file names.

Two naming shapes occur on disk:

- Numeric-leading (module directories): ``5.7.11-rc10-gentoo``
- Name-leading (images, configs, maps, sources): ``linux-5.7.11-rc10-gentoo.old``

A trailing ``.old`` marks a legacy install, the previous build of the
same version kept around by ``make install``.
"""

import re
from dataclasses import dataclass, replace
from functools import total_ordering

from kernel_janitor.kernel.errors import VersionParseError

_DECIMAL = re.compile(r"[0-9]+")
_RELEASE_CANDIDATE = re.compile(r"rc([0-9]+)")

# Components are stored as unsigned 32-bit numbers
_MAX_COMPONENT = 2**32 - 1

LEGACY_SUFFIX = ".old"


@total_ordering
@dataclass(frozen=True, slots=True)
class KernelVersion:
    """Canonical, orderable kernel version.

    Equality and hashing use all five fields, so a legacy version and
    its current counterpart are distinct mapping keys. Use
    :meth:`equals_ignoring_legacy` to compare versions regardless of
    the legacy flag.

    Ordering compares ``(major, minor, patch)``, then the release
    candidate (a version without one sorts before any candidate, and
    candidates compare numerically), and finally places a legacy
    version before its non-legacy twin.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch level.
        release_candidate: Release candidate number, or None.
        is_legacy: True for ``.old`` installs.
    """

    major: int
    minor: int
    patch: int
    release_candidate: int | None = None
    is_legacy: bool = False

    def __post_init__(self) -> None:
        """Validate version components after initialization."""
        for name in ("major", "minor", "patch"):
            if getattr(self, name) < 0:
                msg = f"{name} must be non-negative, got {getattr(self, name)}"
                raise ValueError(msg)
        if self.release_candidate is not None and self.release_candidate < 0:
            msg = f"release_candidate must be non-negative, got {self.release_candidate}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, raw: str) -> "KernelVersion":
        """Parse a file name into a KernelVersion.

        Names starting with a digit use the numeric-leading shape
        (``MAJOR.MINOR.PATCH[-rcN]-SUFFIX``); everything else uses the
        name-leading shape (``NAME-MAJOR.MINOR.PATCH[-rcN]-SUFFIX[.old]``).
        A malformed release candidate marker is read as no release
        candidate rather than an error.

        Args:
            raw: File name to parse.

        Returns:
            Parsed KernelVersion.

        Raises:
            VersionParseError: If the name does not contain a version.
        """
        if not raw:
            raise VersionParseError(raw, "empty string")

        segments = raw.split("-")
        if _DECIMAL.match(raw):
            # 5.7.11-rc10-gentoo -> ['5.7.11', 'rc10', 'gentoo']
            if len(segments) < 2:
                raise VersionParseError(raw, "expected at least 2 '-' separated segments")
            triple, rc_segment = segments[0], segments[1]
        else:
            # linux-5.7.11-rc10-gentoo.old -> ['linux', '5.7.11', 'rc10', 'gentoo.old']
            if len(segments) < 3:
                raise VersionParseError(raw, "expected at least 3 '-' separated segments")
            triple, rc_segment = segments[1], segments[2]

        components = triple.split(".")
        if len(components) < 3:
            raise VersionParseError(raw, f"{triple!r} is not MAJOR.MINOR.PATCH")

        numbers: list[int] = []
        for component in components[:3]:
            if not _DECIMAL.fullmatch(component):
                raise VersionParseError(raw, f"{component!r} is not a non-negative integer")
            number = int(component)
            if number > _MAX_COMPONENT:
                raise VersionParseError(raw, f"{component!r} is too large")
            numbers.append(number)

        rc_match = _RELEASE_CANDIDATE.fullmatch(rc_segment)
        release_candidate = int(rc_match.group(1)) if rc_match else None
        if release_candidate is not None and release_candidate > _MAX_COMPONENT:
            release_candidate = None

        return cls(
            major=numbers[0],
            minor=numbers[1],
            patch=numbers[2],
            release_candidate=release_candidate,
            is_legacy=raw.endswith(LEGACY_SUFFIX),
        )

    @property
    def version_triple(self) -> tuple[int, int, int]:
        """Return (major, minor, patch)."""
        return (self.major, self.minor, self.patch)

    def render(self) -> str:
        """Render the canonical ``MAJOR.MINOR.PATCH[-rcN][.old]`` form."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.release_candidate is not None:
            text += f"-rc{self.release_candidate}"
        if self.is_legacy:
            text += LEGACY_SUFFIX
        return text

    def equals_ignoring_legacy(self, other: "KernelVersion") -> bool:
        """Check whether two versions match apart from the legacy flag."""
        return (
            self.version_triple == other.version_triple
            and self.release_candidate == other.release_candidate
        )

    def counterpart(self) -> "KernelVersion":
        """Return the non-legacy version sharing this version's numbers."""
        return replace(self, is_legacy=False)

    def _sort_key(self) -> tuple[int, int, int, bool, int, bool]:
        return (
            self.major,
            self.minor,
            self.patch,
            self.release_candidate is not None,
            self.release_candidate or 0,
            not self.is_legacy,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, KernelVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.render()
