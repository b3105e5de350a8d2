from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from nk.release.model import Commit, Contributor


def aggregate(commits: Iterable[Commit]) -> tuple[Contributor, ...]:
    """Count commits per exact `(name, email)` identity.

    Sorted by commit count descending, then name, then email (all
    case-sensitive), so identical input always renders identically.
    """
    counts = Counter((c.author_name, c.author_email) for c in commits)
    contributors = [Contributor(name=n, email=e, commit_count=k) for (n, e), k in counts.items()]
    contributors.sort(key=lambda c: (-c.commit_count, c.name, c.email))
    return tuple(contributors)
