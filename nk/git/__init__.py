"""Git adapter.

`Repository` implements the release engine's `VcsReader` interface by
running the git CLI:

    repo = Repository(Path("."))
    match repo.list_tags():
        case Ok(tags):
            for name, sha in tags:
                print(name, sha[:7])
        case Err(e):
            print(f"git failed: {e.message}")
"""

from nk.git.repository import Repository
from nk.release.vcs import VcsError

__all__ = [
    "Repository",
    "VcsError",
]
