"""Projects module - cascade deletion of a project and its dependents."""

from .cascade import delete_project_cascade

__all__ = ["delete_project_cascade"]
