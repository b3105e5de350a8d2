"""Release use cases: generate release notes, create a release.

The functions here wire the pure engine modules to a `VcsReader` and a
console. History is read completely before anything is categorised, and
any VCS failure aborts the command with the error unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

from nk.core.result import Err, Ok, Result
from nk.output.console import ConsoleProtocol
from nk.platform.files import atomic_write_text, read_text_if_exists
from nk.release.categorize import categorize, suggest_bump
from nk.release.changelog import merge
from nk.release.contributors import aggregate
from nk.release.errors import ChangelogIOError, DuplicateVersionError, ManifestError, VersionError
from nk.release.links import build_links, parse_remote
from nk.release.manifest import set_manifest_version
from nk.release.model import Commit, ParsedCommit, ReleaseNotesDocument, ReleasePayload, Tag
from nk.release.parser import count_unconventional, parse_commits
from nk.release.render import render_changelog_section, render_release_notes
from nk.release.semver import BumpSpec, ExplicitVersion, SemVer, next_version
from nk.release.tags import parse_tag, parse_tags, resolve_latest, resolve_range, tied_for_latest, version_tags
from nk.release.vcs import VcsError, VcsReader

type ReleaseError = VcsError | VersionError | DuplicateVersionError | ChangelogIOError | ManifestError


@dataclass(frozen=True, slots=True)
class ReleaseInputs:
    """History gathered for one release.

    Attributes:
        previous_tag: Start of the range (exclusive), None for an initial release.
        base_version: Version the bump is computed from.
        head: Commit hash at the end of the range (inclusive).
        commits: Commits in the range, newest first.
        parsed: `commits` parsed, same order.
        tags: Every tag in the repository.
        remote_url: URL of the configured remote, if any.
    """

    previous_tag: Tag | None
    base_version: SemVer | None
    head: str
    commits: tuple[Commit, ...]
    parsed: tuple[ParsedCommit, ...]
    tags: tuple[Tag, ...]
    remote_url: str | None


@dataclass(frozen=True, slots=True)
class ReleaseNotes:
    document: ReleaseNotesDocument
    markdown: str
    changelog_section: str


@dataclass(frozen=True, slots=True)
class CreatedRelease:
    notes: ReleaseNotes
    payload: ReleasePayload
    changelog_path: Path
    pushed: bool
    dry_run: bool


def collect_inputs(
    vcs: VcsReader,
    *,
    console: ConsoleProtocol,
    from_ref: str | None = None,
    to_ref: str | None = None,
    remote: str = "origin",
) -> Result[ReleaseInputs, VcsError]:
    """Resolve the previous release and read the commits since then."""
    head_r = vcs.resolve_ref(to_ref) if to_ref else vcs.head()
    if isinstance(head_r, Err):
        return head_r
    head = head_r.value

    refs_r = vcs.list_tags()
    if isinstance(refs_r, Err):
        return refs_r
    tags = parse_tags(refs_r.value)
    console.debug(f"found {len(tags)} tags, {len(version_tags(tags))} parse as versions")

    candidates = tags
    ancestry: tuple[str, ...] | None = None
    if to_ref:
        # Only tags on the history of the range end can start the range.
        ancestry_r = _ancestry(vcs, head)
        if isinstance(ancestry_r, Err):
            return ancestry_r
        ancestry = ancestry_r.value
        reachable = set(ancestry)
        candidates = tuple(t for t in tags if t.commit_hash in reachable)

    latest_r = _latest_tag(vcs, candidates, head=head, ancestry=ancestry)
    if isinstance(latest_r, Err):
        return latest_r
    latest = latest_r.value

    previous = latest
    if from_ref:
        previous_r = _tag_for_ref(vcs, tags, from_ref)
        if isinstance(previous_r, Err):
            return previous_r
        previous = previous_r.value

    if previous is not None:
        console.info(f"previous release: {previous.raw_name}")
    else:
        console.info("no previous release tag, starting from the first commit")

    commits_r = resolve_range(vcs, previous, head)
    if isinstance(commits_r, Err):
        return commits_r
    commits = commits_r.value

    remote_r = vcs.remote_url(remote)
    if isinstance(remote_r, Err):
        return remote_r

    parsed = parse_commits(commits)
    skipped = count_unconventional(parsed)
    if skipped:
        console.debug(f"{skipped} of {len(parsed)} commits do not follow Conventional Commits")

    base = previous.version if previous is not None and previous.version is not None else None
    if base is None and latest is not None:
        base = latest.version

    return Ok(
        ReleaseInputs(
            previous_tag=previous,
            base_version=base,
            head=head,
            commits=commits,
            parsed=parsed,
            tags=tags,
            remote_url=remote_r.value,
        )
    )


def build_document(
    inputs: ReleaseInputs,
    *,
    version: SemVer,
    tag_name: str,
    now: datetime,
) -> ReleaseNotesDocument:
    links = build_links(inputs.remote_url, inputs.previous_tag, tag_name)
    return ReleaseNotesDocument(
        version=version,
        tag_name=tag_name,
        previous_tag=inputs.previous_tag,
        sections=categorize(inputs.parsed),
        contributors=aggregate(inputs.commits),
        commits=inputs.commits,
        compare_link=links.compare_link,
        generated_at=now,
        remote=parse_remote(inputs.remote_url),
    )


def render_notes(document: ReleaseNotesDocument) -> ReleaseNotes:
    return ReleaseNotes(
        document=document,
        markdown=render_release_notes(document),
        changelog_section=render_changelog_section(document),
    )


def generate_release_notes(
    vcs: VcsReader,
    *,
    console: ConsoleProtocol,
    now: datetime,
    bump: BumpSpec | None = None,
    from_ref: str | None = None,
    to_ref: str | None = None,
    tag_prefix: str = "v",
    remote: str = "origin",
) -> Result[ReleaseNotes, ReleaseError]:
    """Release notes for the commits since the previous release.

    Without `bump`, the bump is suggested from the commits themselves.
    """
    inputs_r = collect_inputs(vcs, console=console, from_ref=from_ref, to_ref=to_ref, remote=remote)
    if isinstance(inputs_r, Err):
        return inputs_r
    inputs = inputs_r.value

    if bump is None:
        bump = suggest_bump(inputs.parsed)
        console.debug(f"suggested bump: {bump}")

    version_r = next_version(inputs.base_version, bump)
    if isinstance(version_r, Err):
        return version_r
    version = version_r.value

    document = build_document(inputs, version=version, tag_name=f"{tag_prefix}{version}", now=now)
    console.info(f"{len(inputs.commits)} commits, {len(document.contributors)} contributors")
    if document.has_breaking_changes:
        console.warning(f"{document.tag_name} contains breaking changes")
    return Ok(render_notes(document))


def create_release(
    vcs: VcsReader,
    *,
    console: ConsoleProtocol,
    root: Path,
    changelog_path: Path,
    bump: BumpSpec,
    now: datetime,
    tag_prefix: str = "v",
    remote: str = "origin",
    message: str | None = None,
    draft: bool = False,
    push: bool = False,
    dry_run: bool = False,
    version_file: Path | None = None,
) -> Result[CreatedRelease, ReleaseError]:
    """Compute the next version, update the changelog, commit and tag.

    Steps stop at the first failure. With `dry_run`, nothing is written and
    no git state changes; the returned value describes what would happen.
    When the release commit fails, the files written for it are put back.
    """
    inputs_r = collect_inputs(vcs, console=console, remote=remote)
    if isinstance(inputs_r, Err):
        return inputs_r
    inputs = inputs_r.value

    version_r = next_version(inputs.base_version, bump)
    if isinstance(version_r, Err):
        return version_r
    version = version_r.value

    if (
        isinstance(bump, ExplicitVersion)
        and inputs.base_version is not None
        and not inputs.base_version.precedes(version)
    ):
        console.warning(f"{version} is not greater than the previous release {inputs.base_version}")

    tag_name = f"{tag_prefix}{version}"
    if any(t.raw_name == tag_name for t in inputs.tags):
        return Err(DuplicateVersionError(version=str(version), message=f"tag {tag_name} already exists"))

    document = build_document(inputs, version=version, tag_name=tag_name, now=now)
    notes = render_notes(document)

    existing_r = _read_changelog(changelog_path)
    if isinstance(existing_r, Err):
        return existing_r
    merged_r = merge(existing_r.value, notes.changelog_section, version)
    if isinstance(merged_r, Err):
        return merged_r

    # path -> (text before the release, text after)
    writes: dict[Path, tuple[str | None, str]] = {changelog_path: (existing_r.value, merged_r.value)}
    if version_file is not None:
        manifest_r = _bump_manifest(version_file, version)
        if isinstance(manifest_r, Err):
            return manifest_r
        writes[version_file] = manifest_r.value

    payload = ReleasePayload(
        tag_name=tag_name,
        title=f"Release {tag_name}",
        body=notes.markdown,
        draft=draft,
        prerelease=version.is_prerelease,
    )

    if dry_run:
        console.info(f"dry run: would release {tag_name} ({len(inputs.commits)} commits)")
        return Ok(CreatedRelease(notes, payload, changelog_path, pushed=False, dry_run=True))

    paths = list(writes)
    for i, path in enumerate(paths):
        try:
            atomic_write_text(path, writes[path][1])
        except OSError as e:
            _restore(writes, console, written=paths[:i])
            if path == changelog_path:
                return Err(ChangelogIOError(path=path, message=f"failed to write changelog: {e}"))
            return Err(ManifestError(path=path, message=f"failed to write version file: {e}"))
        console.success(f"updated {_display_path(path, root)}")

    commit_r = vcs.commit(paths, f"chore(release): {tag_name}")
    if isinstance(commit_r, Err):
        _restore(writes, console, written=paths)
        return commit_r
    sha = commit_r.value

    tag_r = vcs.create_tag(tag_name, sha, message or f"Release {tag_name}")
    if isinstance(tag_r, Err):
        hint = (
            f"release commit {sha[:12]} was created but not tagged; "
            f"run `git tag -a {tag_name} {sha}` or revert the commit"
        )
        return Err(replace(tag_r.error, hint=hint))
    console.success(f"created tag {tag_name}")

    if push:
        push_r = vcs.push_tag(tag_name, remote)
        if isinstance(push_r, Err):
            hint = f"tag {tag_name} exists locally; push it with `git push {remote} refs/tags/{tag_name}`"
            return Err(replace(push_r.error, hint=hint))
        console.success(f"pushed {tag_name} to {remote}")

    return Ok(CreatedRelease(notes, payload, changelog_path, pushed=push, dry_run=False))


def history(tags: tuple[Tag, ...]) -> list[Tag]:
    """Release tags, newest version first."""
    return version_tags(tags)


def _latest_tag(
    vcs: VcsReader,
    tags: tuple[Tag, ...],
    *,
    head: str,
    ancestry: tuple[str, ...] | None = None,
) -> Result[Tag | None, VcsError]:
    tied = tied_for_latest(tags)
    if len(tied) <= 1:
        return Ok(tied[0] if tied else None)

    # Several names for the same version: rank them by commit recency.
    if ancestry is None:
        ancestry_r = _ancestry(vcs, head)
        if isinstance(ancestry_r, Err):
            return ancestry_r
        ancestry = ancestry_r.value
    return Ok(resolve_latest(tags, history=ancestry))


def _ancestry(vcs: VcsReader, head: str) -> Result[tuple[str, ...], VcsError]:
    """Hashes of every commit reachable from `head`, newest first."""
    return vcs.list_commits(None, head).map(lambda commits: tuple(c.hash for c in commits))


def _tag_for_ref(vcs: VcsReader, tags: tuple[Tag, ...], ref: str) -> Result[Tag, VcsError]:
    for tag in tags:
        if tag.raw_name == ref:
            return Ok(tag)
    sha_r = vcs.resolve_ref(ref)
    if isinstance(sha_r, Err):
        return sha_r
    return Ok(parse_tag(ref, sha_r.value))


def _read_changelog(path: Path) -> Result[str | None, ChangelogIOError]:
    try:
        return Ok(read_text_if_exists(path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ChangelogIOError(path=path, message=f"failed to read changelog: {e}"))


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _bump_manifest(path: Path, version: SemVer) -> Result[tuple[str, str], ManifestError]:
    try:
        text = read_text_if_exists(path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(path=path, message=f"failed to read version file: {e}"))
    if text is None:
        return Err(ManifestError(path=path, message="version file not found"))
    updated = set_manifest_version(text, version)
    if updated is None:
        return Err(ManifestError(path=path, message="no version field in [project], [package] or [tool.poetry]"))
    return Ok((text, updated))


def _restore(
    writes: dict[Path, tuple[str | None, str]],
    console: ConsoleProtocol,
    *,
    written: list[Path],
) -> None:
    for path in written:
        before = writes[path][0]
        try:
            if before is None:
                path.unlink(missing_ok=True)
            else:
                atomic_write_text(path, before)
        except OSError as e:
            console.warning(f"could not restore {path}: {e}")
            continue
        console.info(f"restored {path.name}")
