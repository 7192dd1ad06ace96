"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/plan_service.py
Turns ranked duplicate groups (and the other finders' results) into quarantine
move plans and human-readable reports. Nothing here touches the filesystem.

Quarantine layout:
    <quarantine>/exact/group_001/
    <quarantine>/semantic/group_001_<title>/
    <quarantine>/<live|instrumental|intro>/
    <quarantine>/orphan_lrc/<relative path>
    <quarantine>/empty_dirs/<relative path>
"""

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from songsweep.core.models import (
    DuplicateGroup, DuplicateKind, EmptyDirectory, FileCandidate, MoveOperation,
    OrphanLyric, ResolutionPlan, SpecialCategory)
from songsweep.utils.convert_utils import ConvertUtils

ORPHAN_LYRICS_DIR = "orphan_lrc"
EMPTY_DIRS_DIR = "empty_dirs"

SEPARATOR = "=" * 60


@dataclass
class EmitResult:
    report: str
    move_operations: List[MoveOperation]
    plan: ResolutionPlan


class PlanService:
    """Builds move plans and reports. Destinations are unique within one plan."""

    @staticmethod
    def _claim(destination: str, taken: Set[str]) -> str:
        """Reserve destination, renaming to "name_2.ext", "name_3.ext"... on collision."""
        if destination not in taken:
            taken.add(destination)
            return destination
        stem, ext = os.path.splitext(destination)
        counter = 2
        while f"{stem}_{counter}{ext}" in taken:
            counter += 1
        unique = f"{stem}_{counter}{ext}"
        taken.add(unique)
        return unique

    @staticmethod
    def _moves_for(
            candidate: FileCandidate,
            target_dir: str,
            taken: Set[str],
            claimed_lyrics: Set[str]
    ) -> List[MoveOperation]:
        """
        The audio move, followed by its lyric sidecar into the same folder.
        A sidecar already in claimed_lyrics (moved with another file, or used by a
        kept one) stays where it is.
        """
        audio_dest = PlanService._claim(os.path.join(target_dir, candidate.name), taken)
        moves = [MoveOperation(source=candidate.path, destination=audio_dest)]
        lyric = candidate.associated_lyric_path
        if lyric and lyric not in claimed_lyrics:
            claimed_lyrics.add(lyric)
            # Keep the sidecar's base name equal to the (possibly renamed) audio file
            lyric_ext = os.path.splitext(candidate.associated_lyric_path)[1]
            lyric_dest = PlanService._claim(os.path.splitext(audio_dest)[0] + lyric_ext, taken)
            moves.append(MoveOperation(
                source=candidate.associated_lyric_path, destination=lyric_dest, is_lyric=True
            ))
        return moves

    @staticmethod
    def group_directory(group: DuplicateGroup, index: int, quarantine_dir: str) -> str:
        """Quarantine folder for the index-th (1-based) group of its kind."""
        if group.kind == DuplicateKind.EXACT:
            return os.path.join(quarantine_dir, "exact", f"group_{index:03d}")
        _, _, title = group.key.partition("|")
        safe_title = ConvertUtils.safe_dir_name(title)
        return os.path.join(quarantine_dir, "semantic", f"group_{index:03d}_{safe_title}")

    @staticmethod
    def build_plan(
            groups: List[DuplicateGroup],
            quarantine_dir: str,
            candidates: Optional[List[FileCandidate]] = None
    ) -> ResolutionPlan:
        """
        Plan for ranked groups: the first member of every group is kept, the rest
        (with their lyric sidecars) move into the group's quarantine folder.

        A lyric file shared with any file that stays in the library (a keeper, or
        one of `candidates` outside every group) is not moved. Each lyric file
        is moved at most once.
        """
        plan = ResolutionPlan(quarantine_dir=quarantine_dir, groups=list(groups))
        taken: Set[str] = set()

        removable_paths = {c.path for g in groups if g.is_duplicate() for c in g.removable}
        library = candidates if candidates is not None else [c for g in groups for c in g.members]
        claimed_lyrics = {
            c.associated_lyric_path for c in library
            if c.associated_lyric_path and c.path not in removable_paths
        }
        counters = {DuplicateKind.EXACT: 0, DuplicateKind.SEMANTIC: 0}

        for group in groups:
            if not group.is_duplicate():
                continue
            counters[group.kind] += 1
            target_dir = PlanService.group_directory(group, counters[group.kind], quarantine_dir)
            plan.keepers.append(group.keeper)
            for candidate in group.removable:
                plan.removable.append(candidate)
                plan.move_operations.extend(PlanService._moves_for(candidate, target_dir, taken, claimed_lyrics))

        return plan

    @staticmethod
    def render_report(plan: ResolutionPlan, root_dir: str) -> str:
        if not plan.groups:
            return "✨ No duplicate songs found."

        destinations = {op.source: op.destination for op in plan.move_operations}
        moved_lyrics = {op.source for op in plan.move_operations if op.is_lyric}
        lines = []
        for kind, icon in ((DuplicateKind.EXACT, "🔒"), (DuplicateKind.SEMANTIC, "🎵")):
            groups = [g for g in plan.groups if g.kind == kind]
            if not groups:
                continue
            lines.append(f"\n{icon} {kind.display_name} ({len(groups)} groups)")
            for idx, group in enumerate(groups, 1):
                if kind == DuplicateKind.EXACT:
                    heading = f"{group.key[:8]}... | {ConvertUtils.bytes_to_human(group.keeper.size_bytes)}"
                else:
                    heading = (f"{group.title} ({group.duplicate_count} files, "
                               f"{ConvertUtils.bytes_to_human(group.total_size)})")
                lines.append(f"\n   [Group {idx}] {heading}")

                for position, member in enumerate(group.members):
                    rel_path = os.path.relpath(member.path, root_dir)
                    size = ConvertUtils.bytes_to_human(member.size_bytes)
                    if position == 0:
                        lines.append(f"      ✅ Keep:   {rel_path} ({size})")
                    else:
                        lines.append(f"      ❌ Remove: {rel_path} ({size})")
                        if member.path in destinations:
                            lines.append(f"         → {os.path.relpath(destinations[member.path], root_dir)}")
                    if member.associated_lyric_path in moved_lyrics:
                        lines.append(f"         📝 Lyrics: {os.path.basename(member.associated_lyric_path)}")

        exact_count = sum(1 for g in plan.groups if g.kind == DuplicateKind.EXACT)
        lyric_moves = sum(1 for op in plan.move_operations if op.is_lyric)
        lines += [
            "",
            SEPARATOR,
            f"Summary: {len(plan.groups)} groups ({exact_count} exact, {len(plan.groups) - exact_count} semantic), "
            f"{len(plan.keepers)} files kept, {len(plan.removable)} files to move, {lyric_moves} lyric files",
            f"Space to free: {ConvertUtils.bytes_to_human(plan.bytes_to_free)}",
        ]
        return "\n".join(lines).lstrip("\n")

    @staticmethod
    def emit(
            groups: List[DuplicateGroup],
            root_dir: str,
            quarantine_dir: str,
            candidates: Optional[List[FileCandidate]] = None
    ) -> EmitResult:
        """Plan and report for ranked duplicate groups."""
        plan = PlanService.build_plan(groups, quarantine_dir, candidates)
        return EmitResult(
            report=PlanService.render_report(plan, root_dir),
            move_operations=list(plan.move_operations),
            plan=plan,
        )

    # ---- special versions ----

    @staticmethod
    def special_versions_moves(
            found: Dict[SpecialCategory, List[FileCandidate]],
            quarantine_dir: str
    ) -> List[MoveOperation]:
        taken: Set[str] = set()
        claimed_lyrics: Set[str] = set()
        moves = []
        for category, candidates in found.items():
            target_dir = os.path.join(quarantine_dir, category.value)
            for candidate in candidates:
                moves.extend(PlanService._moves_for(candidate, target_dir, taken, claimed_lyrics))
        return moves

    @staticmethod
    def render_special_versions_report(found: Dict[SpecialCategory, List[FileCandidate]], root_dir: str) -> str:
        total = sum(len(c) for c in found.values())
        if not total:
            return "✨ No special versions found."

        lines = []
        for category, candidates in found.items():
            if not candidates:
                continue
            lines.append(f"\n🎤 {category.label} ({len(candidates)})")
            for candidate in candidates:
                lines.append(
                    f"   {os.path.relpath(candidate.path, root_dir)} "
                    f"({ConvertUtils.bytes_to_megabytes(candidate.size_bytes)})"
                )
                if candidate.associated_lyric_path:
                    lines.append(f"      📝 Lyrics: {os.path.basename(candidate.associated_lyric_path)}")

        lines += ["", SEPARATOR, f"Summary: {total} special version files"]
        return "\n".join(lines).lstrip("\n")

    # ---- orphan lyrics ----

    @staticmethod
    def orphan_lyric_moves(orphans: List[OrphanLyric], root_dir: str, quarantine_dir: str) -> List[MoveOperation]:
        """Orphans keep their path relative to the library inside orphan_lrc/."""
        taken: Set[str] = set()
        target_root = os.path.join(quarantine_dir, ORPHAN_LYRICS_DIR)
        return [
            MoveOperation(
                source=orphan.path,
                destination=PlanService._claim(
                    os.path.join(target_root, os.path.relpath(orphan.path, root_dir)), taken
                ),
                is_lyric=True,
            )
            for orphan in orphans
        ]

    @staticmethod
    def render_orphan_report(orphans: List[OrphanLyric], root_dir: str) -> str:
        if not orphans:
            return "✨ No orphaned lyric files found."
        lines = [f"📝 Orphaned lyric files ({len(orphans)})"]
        lines += [f"   {os.path.relpath(o.path, root_dir)}" for o in orphans]
        return "\n".join(lines)

    # ---- empty directories ----

    @staticmethod
    def empty_directory_moves(dirs: List[EmptyDirectory], root_dir: str, quarantine_dir: str) -> List[MoveOperation]:
        target_root = os.path.join(quarantine_dir, EMPTY_DIRS_DIR)
        return [
            MoveOperation(source=d.path, destination=os.path.join(target_root, os.path.relpath(d.path, root_dir)))
            for d in dirs
        ]

    @staticmethod
    def render_empty_dirs_report(dirs: List[EmptyDirectory], root_dir: str) -> str:
        if not dirs:
            return "✨ No empty directories found."
        lines = [f"📂 Directories without music ({len(dirs)})"]
        lines += [f"   {os.path.relpath(d.path, root_dir)} [{d.reason}]" for d in dirs]
        return "\n".join(lines)
