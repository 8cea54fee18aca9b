"""Project API endpoints"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_storage, get_tenant_filter, require_found
from domain.storage.tenant_filter import TenantFilter
from models import as_dict
from storage import Storage
from tenancy.verifier import RelatedEntityType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/{project_id}")
async def get_project(
    project_id: int,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> Dict[str, Any]:
    project = require_found(await storage.projects.get(project_id, tenant), "Project")
    return as_dict(project)


@router.get("/{project_id}/attachments")
async def list_project_attachments(
    project_id: int,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> List[Dict[str, Any]]:
    require_found(await storage.projects.get(project_id, tenant), "Project")
    attachments = await storage.file_attachments.list_by_related_entity(
        RelatedEntityType.PROJECT.value, project_id, tenant
    )
    return [as_dict(attachment) for attachment in attachments]


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    storage: Storage = Depends(get_storage),
    tenant: TenantFilter = Depends(get_tenant_filter),
) -> None:
    """
    Delete a project and everything that belongs to it.

    Raises:
        HTTPException 404: Project does not exist for this tenant
        HTTPException 500: Cascade failed and was rolled back
    """
    require_found(await storage.projects.get(project_id, tenant), "Project")
    if not await storage.projects.delete(project_id, tenant):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Project deletion failed",
        )
