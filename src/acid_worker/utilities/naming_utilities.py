""" Collection of naming utility functions: deterministic ids and Kubernetes resource names """

import hashlib
import re
from typing import Final

DEFAULT_COMMIT: Final = "master"
PROJECT_ID_PREFIX: Final = "acid-"

MAX_K8S_SEGMENT_NAME: Final = 63
_PROJECT_ID_HASH_WIDTH: Final = 54
_NAME_HASH_WIDTH: Final = 12
_SHORT_COMMIT_WIDTH: Final = 8

# Room left for "-<hex>-<short commit>" in a job runner name
MAX_JOB_NAME: Final = MAX_K8S_SEGMENT_NAME - _NAME_HASH_WIDTH - _SHORT_COMMIT_WIDTH - 2

_SEGMENT_RE: Final = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
_UNSAFE_CHARS_RE: Final = re.compile(r"[^a-z0-9-]")
_PATH_SEPARATORS_RE: Final = re.compile(r"[./]")


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_valid_segment(name: str) -> bool:
    """Check `name` against the DNS-1123 label syntax used for resource names"""
    return bool(name) and len(name) <= MAX_K8S_SEGMENT_NAME and _SEGMENT_RE.match(name) is not None


def sanitize_name(name: str) -> str:
    """Replace path separators and dots with '-', e.g. 'github.com/deis/x' -> 'github-com-deis-x'"""
    return _PATH_SEPARATORS_RE.sub("-", name)


def is_valid_job_name(name: str) -> bool:
    """A valid segment short enough to prefix every job runner name"""
    return is_valid_segment(name) and len(name) <= MAX_JOB_NAME


def cache_volume_name(project_name: str, job_name: str) -> str:
    """
    Volume and claim name of a job's cache: `<sanitized project name>-<job name>`.

    Lowercased and reduced to resource name syntax. Names over 63 characters are truncated
    and suffixed with a hash of the full name, so distinct projects keep distinct claims.
    """
    name = _UNSAFE_CHARS_RE.sub("-", f"{sanitize_name(project_name)}-{job_name}".lower()).strip("-")
    if len(name) <= MAX_K8S_SEGMENT_NAME:
        return name
    prefix = name[: MAX_K8S_SEGMENT_NAME - _NAME_HASH_WIDTH - 1].rstrip("-")
    return f"{prefix}-{_sha256_hex(name)[:_NAME_HASH_WIDTH]}"


def resolve_commit(commit: str | None) -> str:
    """The event commit, or 'master' when it is missing or cleared"""
    return commit or DEFAULT_COMMIT


def short_commit(commit: str | None) -> str:
    """First characters of the resolved commit, reduced to resource name syntax"""
    short = _UNSAFE_CHARS_RE.sub("-", resolve_commit(commit)[:_SHORT_COMMIT_WIDTH].lower()).strip("-")
    return short or DEFAULT_COMMIT


def project_id(namespace: str, project_name: str) -> str:
    """Stable project identifier for a (namespace, project name) pair"""
    return PROJECT_ID_PREFIX + _sha256_hex(f"{namespace}/{project_name}")[:_PROJECT_ID_HASH_WIDTH]


def job_runner_name(job_name: str, build_id: str, commit: str | None) -> str:
    """
    Name shared by the Secret and Pod of one job run: `<job name>-<hex>-<short commit>`.

    The hex fragment hashes job name and build id, so two jobs of one build or two builds
    of one job never share a name.
    """
    fragment = _sha256_hex(f"{job_name}:{build_id}")[:_NAME_HASH_WIDTH]
    return f"{job_name}-{fragment}-{short_commit(commit)}"
