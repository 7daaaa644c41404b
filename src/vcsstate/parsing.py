"""
Parsers for git's textual output.

Each function takes raw stdout and returns structured values, raising
MalformedOutputError when an expected marker is missing. Nothing here
runs git.
"""

from __future__ import annotations

import string

from .core.errors import MalformedOutputError

# Length of a git revision hash (SHA-1).
REVISION_LENGTH = 40

HEADS_PREFIX = "refs/heads/"
SYMREF_PREFIX = "ref: refs/heads/"
HEAD_BRANCH_MARKER = "\n  HEAD branch: "
PREFERRED_BRANCH = "master"

_HEX_DIGITS = frozenset(string.hexdigits)


def trim_last_newline(out: str) -> str:
    """Drop one trailing newline, as rev-parse and friends print one."""
    return out.removesuffix("\n")


def _lines(out: str) -> list[str]:
    return [line for line in trim_last_newline(out).split("\n") if line]


def is_revision(value: str) -> bool:
    """True for a full 40 character hex revision."""
    return len(value) == REVISION_LENGTH and all(c in _HEX_DIGITS for c in value)


def parse_revision(out: str) -> str:
    """
    Parse the single revision printed by `git rev-parse <ref>`.

    Raises:
        MalformedOutputError: output is not exactly one 40-char hex revision
    """
    revision = trim_last_newline(out)
    if len(revision) < REVISION_LENGTH:
        raise MalformedOutputError(
            user_message=f"output length {len(revision)} is shorter than {REVISION_LENGTH}",
            debug_context=out,
        )
    if not is_revision(revision):
        raise MalformedOutputError(
            user_message=f"'{revision}' is not a {REVISION_LENGTH} character hex revision",
            debug_context=out,
        )
    return revision


def parse_remote_fetch_url(out: str, remote: str = "origin") -> str | None:
    """
    Return the fetch URL of remote from `git remote -v` output, if listed.

    Lines look like "origin\thttps://example.com/repo.git (fetch)".
    """
    suffix = " (fetch)"
    for line in _lines(out):
        name, _, url_kind = line.partition("\t")
        if name != remote or not url_kind.endswith(suffix):
            continue
        return url_kind[: -len(suffix)]
    return None


def _split_ref_lines(out: str) -> list[tuple[str, str]]:
    pairs = []
    for line in _lines(out):
        left, sep, right = line.partition("\t")
        if sep:
            pairs.append((left, right))
    return pairs


def pick_branch(candidates: list[str]) -> str | None:
    """
    Choose among branches pointing at the HEAD revision.

    There is no reliable way to tell which one HEAD refers to without
    --symref, so prefer "master" and otherwise take the first listed.
    """
    if not candidates:
        return None
    if PREFERRED_BRANCH in candidates:
        return PREFERRED_BRANCH
    return candidates[0]


def guess_branch(out: str, revision: str) -> str | None:
    """Best-effort HEAD branch from a plain ls-remote listing."""
    candidates = [
        ref[len(HEADS_PREFIX):]
        for rev, ref in _split_ref_lines(out)
        if rev == revision and ref.startswith(HEADS_PREFIX)
    ]
    return pick_branch(candidates)


def parse_ls_remote(out: str) -> tuple[str, str]:
    """
    Parse branch and revision from `git ls-remote <remote> HEAD refs/heads/*`.

    Lines look like "7cafcd837844e784b526369c9bce262804aebc60\trefs/heads/main".

    Raises:
        MalformedOutputError: empty output, or no HEAD / matching branch
    """
    if not out:
        raise MalformedOutputError(user_message="empty ls-remote output")

    revision = next((rev for rev, ref in _split_ref_lines(out) if ref == "HEAD"), "")
    branch = guess_branch(out, revision) if revision else None
    if not branch or not revision:
        raise MalformedOutputError(
            user_message="HEAD branch or revision not found in ls-remote output",
            debug_context=out,
        )
    return branch, revision


def parse_ls_remote_symref(out: str) -> tuple[str | None, str]:
    """
    Parse branch and revision from `git ls-remote --symref <remote> HEAD refs/heads/*`.

    HEAD lines look like "ref: refs/heads/master\tHEAD" and
    "7cafcd837844e784b526369c9bce262804aebc60\tHEAD". Servers without
    --symref support omit the first kind; then branch is None and the
    caller has to find it another way.

    Raises:
        MalformedOutputError: empty output or no HEAD revision
    """
    if not out:
        raise MalformedOutputError(user_message="empty ls-remote output")

    branch: str | None = None
    revision = ""
    for left, ref in _split_ref_lines(out):
        # Accept "<rev>\tref: refs/heads/<name>" as well.
        if ref.startswith(SYMREF_PREFIX):
            branch = ref[len(SYMREF_PREFIX):]
            if revision:
                return branch, revision
            continue
        if ref != "HEAD":
            continue
        if left.startswith(SYMREF_PREFIX):
            branch = left[len(SYMREF_PREFIX):]
        else:
            revision = left
        if branch and revision:
            return branch, revision

    if not revision:
        raise MalformedOutputError(
            user_message="HEAD branch or revision not found in ls-remote output",
            debug_context=out,
        )
    return None, revision


def parse_head_branch(out: str) -> str:
    """
    Parse the "HEAD branch: <name>" line of `git remote show <remote>`.

    Raises:
        MalformedOutputError: no HEAD branch line
    """
    i = out.find(HEAD_BRANCH_MARKER)
    if i == -1:
        raise MalformedOutputError(user_message="no HEAD branch", debug_context=out)
    i += len(HEAD_BRANCH_MARKER)
    nl = out.find("\n", i)
    return out[i:] if nl == -1 else out[i:nl]


def parse_symbolic_ref_branch(out: str, remote: str = "origin") -> str | None:
    """Branch name from `git symbolic-ref refs/remotes/<remote>/HEAD`."""
    prefix = f"refs/remotes/{remote}/"
    ref = trim_last_newline(out)
    if not ref.startswith(prefix) or len(ref) == len(prefix):
        return None
    return ref[len(prefix):]
