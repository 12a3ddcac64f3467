"""Rule-based grouping of discovered entries into patterns.

Every entry lands in exactly one group, decided by the first rule that
matches in fixed priority order: a known artifact name contained in the
entry name, then a known extension suffix, then the fallback group.
Groups are ordered by total size, largest first; equal sizes keep the
order in which the groups were first seen.
"""

from collections.abc import Iterable, Sequence

from debris.analysis import rules
from debris.analysis.exchange import CandidatePattern
from debris.analysis.models import Pattern, SafetyTier
from debris.core.events import EventCategory, EventLog
from debris.filesystem.models import DiscoveredEntry
from debris.utils.formatting import format_size

_CAT = EventCategory.AI


class PatternClassifier:
    """Groups entries into patterns and assigns safety tiers.

    Args:
        events: Event sink for classification reporting.
        temp_patterns: Ordered artifact name literals.
        extensions: Ordered disposable file extensions.
    """

    def __init__(
        self,
        events: EventLog,
        temp_patterns: Sequence[str] = rules.COMMON_TEMP_PATTERNS,
        extensions: Sequence[str] = rules.FILE_EXTENSIONS,
    ) -> None:
        self._events = events
        self._temp_patterns = tuple(temp_patterns)
        self._extensions = tuple("." + e.lstrip(".") for e in extensions)

    def group_key(self, entry: DiscoveredEntry) -> str:
        """Return the name of the group an entry belongs to."""
        for literal in self._temp_patterns:
            if literal in entry.name:
                return literal

        for ext in self._extensions:
            if entry.name.endswith(ext):
                return rules.extension_group_name(ext)

        return rules.OTHER_GROUP_NAME

    def classify(self, entries: Iterable[DiscoveredEntry], *, quiet: bool = False) -> list[Pattern]:
        """Partition entries into patterns ordered by total size.

        Entries sharing a path are counted once (the last one wins), so the
        result is always a partition of the distinct input paths.

        Args:
            entries: Discovered entries to group.
            quiet: Suppress per-pattern events (used for interim passes).

        Returns:
            Patterns sorted by total size, descending.
        """
        unique: dict[str, DiscoveredEntry] = {}
        for entry in entries:
            unique[entry.path] = entry

        if not unique:
            if not quiet:
                self._events.warning("No files to analyze", _CAT)
            return []

        if not quiet:
            self._events.info(f"Using rule-based analysis for {len(unique)} files", _CAT)

        groups: dict[str, list[DiscoveredEntry]] = {}
        for entry in unique.values():
            groups.setdefault(self.group_key(entry), []).append(entry)

        patterns: list[Pattern] = []
        for name, members in groups.items():
            tier = rules.safety_for(name)
            pattern = Pattern.from_entries(name, members, tier, rules.reason_for(tier))
            patterns.append(pattern)
            if not quiet:
                self._events.info(
                    f"Pattern '{name}': {pattern.item_count} items, "
                    f"{format_size(pattern.total_size_bytes)}, Safety: {tier.value}",
                    _CAT,
                )

        # sorted() is stable, so ties keep group discovery order
        patterns = sorted(patterns, key=lambda p: p.total_size_bytes, reverse=True)

        if not quiet:
            self._events.success(f"Rule-based analysis created {len(patterns)} patterns", _CAT)
        return patterns

    def accept_external(
        self,
        candidates: Sequence[CandidatePattern],
        entries: Iterable[DiscoveredEntry],
    ) -> list[Pattern] | None:
        """Validate an externally proposed classification.

        The proposal is accepted only as a whole. It is rejected if it is
        empty, if any candidate has an empty name or no path drawn from
        ``entries``, if two candidates claim the same path, or if any entry
        is left outside every candidate. Paths that are not among
        ``entries`` are dropped from accepted candidates and statistics are
        recomputed from the entries.

        Args:
            candidates: Patterns proposed by the external agent.
            entries: The entries that were sent for classification.

        Returns:
            Patterns sorted by total size, or None if the proposal was
            rejected.
        """
        by_path = {e.path: e for e in entries}

        if not candidates:
            self._events.warning("External classifier returned no patterns", _CAT)
            return None

        claimed: set[str] = set()
        patterns: list[Pattern] = []

        for candidate in candidates:
            if not candidate.pattern_name:
                self._events.warning("External pattern with empty name rejected", _CAT)
                return None

            members: list[DiscoveredEntry] = []
            for path in dict.fromkeys(candidate.matching_files):
                entry = by_path.get(path)
                if entry is None:
                    continue
                if path in claimed:
                    self._events.warning(
                        f"External pattern '{candidate.pattern_name}' reuses path {path}", _CAT
                    )
                    return None
                claimed.add(path)
                members.append(entry)

            if not members:
                self._events.warning(
                    f"External pattern '{candidate.pattern_name}' matches no scanned files", _CAT
                )
                return None

            tier = SafetyTier(candidate.safety_score)
            patterns.append(
                Pattern.from_entries(
                    candidate.pattern_name,
                    members,
                    tier,
                    candidate.reason.strip() or rules.reason_for(tier),
                )
            )

        uncovered = len(by_path) - len(claimed)
        if uncovered:
            self._events.warning(
                f"External classification left {uncovered} scanned files unassigned", _CAT
            )
            return None

        return sorted(patterns, key=lambda p: p.total_size_bytes, reverse=True)
