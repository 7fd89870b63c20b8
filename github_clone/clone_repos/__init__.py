from .git_clone import clone_repo
from .dispatch import clone_repositories

__all__ = ["clone_repo", "clone_repositories"]
