"""
Workspace service: lookup, update and deletion of workspaces.

The update path enforces its checks in a fixed order (plan gating, hostnames,
logo upload, folder access) so that nothing is persisted unless every check
passes.
"""
import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from linkhub.exceptions import ApiError, ConflictError, internal_error, is_unique_violation
from linkhub.models import Project, User
from linkhub.services.background import get_background_tasks
from linkhub.services.folder_permissions import verify_folder_access
from linkhub.services.hostnames import validate_allowed_hostnames
from linkhub.services.storage_service import get_storage_service
from linkhub.utils.ids import nanoid, normalize_workspace_id, prefix_workspace_id

logger = logging.getLogger(__name__)


def get_workspace_by_id_or_slug(session, id_or_slug: str) -> Optional[Project]:
    """Resolve a workspace from 'ws_<id>', a raw id, or a slug."""
    if id_or_slug.startswith('ws_'):
        return session.query(Project).filter(Project.id == normalize_workspace_id(id_or_slug)).first()
    return session.query(Project).filter(
        or_(Project.slug == id_or_slug, Project.id == id_or_slug)
    ).first()


def _schedule_logo_deletion(storage, logo_url: str, workspace_id: str) -> None:
    key = storage.key_from_url(logo_url)
    if not key:
        logger.info(f"[WORKSPACE] Logo {logo_url} is not a stored object, nothing to clean up")
        return
    get_background_tasks().submit(
        storage.delete,
        key,
        description=f"delete logo {key} of {prefix_workspace_id(workspace_id)}"
    )


def _discard_upload(storage, uploaded: dict, workspace_id: str) -> None:
    get_background_tasks().submit(
        storage.delete,
        uploaded['key'],
        description=f"discard unused logo {uploaded['key']} of {prefix_workspace_id(workspace_id)}"
    )


def update_workspace(session, workspace: Project, user_id: str, data) -> Project:
    """
    Apply a validated UpdateWorkspaceSchema to a workspace.

    Args:
        session: Database session
        workspace: Project being updated
        user_id: Acting user (for folder permission checks)
        data: UpdateWorkspaceSchema instance

    Returns:
        The updated Project

    Raises:
        ApiError: forbidden (plan), unprocessable_entity (hostnames, logo),
                  not_found/forbidden (folder), conflict (slug),
                  internal_server_error (other persistence failures)
    """
    if data.conversion_enabled and not workspace.can_enable_conversions:
        raise ApiError('forbidden', 'Conversion tracking is not available on free or pro plans.')

    valid_hostnames = (
        validate_allowed_hostnames(data.allowed_hostnames)
        if data.allowed_hostnames is not None else None
    )

    storage = None
    logo_uploaded = None
    if data.logo:
        storage = get_storage_service()
        try:
            logo_uploaded = storage.upload(
                f"workspaces/{prefix_workspace_id(workspace.id)}/logo_{nanoid(7)}",
                data.logo
            )
        except ValueError as e:
            raise ApiError('unprocessable_entity', f'logo: {e}')

    workspace_id = workspace.id

    if data.default_folder_id:
        try:
            verify_folder_access(
                session,
                workspace,
                user_id=user_id,
                folder_id=data.default_folder_id,
                required_permission='folders.write'
            )
        except ApiError:
            if logo_uploaded:
                _discard_upload(storage, logo_uploaded, workspace_id)
            raise

    old_slug = workspace.slug
    old_logo = workspace.logo

    try:
        if data.name:
            workspace.name = data.name
        if data.slug:
            workspace.slug = data.slug
        # Always written so that omitting it clears the default folder
        workspace.default_folder_id = data.default_folder_id
        if logo_uploaded:
            workspace.logo = logo_uploaded['url']
        if data.conversion_enabled is not None:
            workspace.conversion_enabled = data.conversion_enabled
        if valid_hostnames is not None:
            workspace.allowed_hostnames = valid_hostnames
        session.flush()

        if data.slug and data.slug != old_slug:
            renamed = session.query(User).filter(
                User.default_workspace == old_slug
            ).update({User.default_workspace: data.slug}, synchronize_session=False)
            logger.info(f"[WORKSPACE] Slug '{old_slug}' -> '{data.slug}', {renamed} user default(s) updated")

        session.commit()
    except IntegrityError as e:
        session.rollback()
        if logo_uploaded:
            _discard_upload(storage, logo_uploaded, workspace_id)
        if is_unique_violation(e):
            raise ConflictError(f'The slug "{data.slug}" is already in use.')
        logger.error(f"[WORKSPACE] Integrity error updating {workspace_id}: {e}")
        raise internal_error(e)
    except SQLAlchemyError as e:
        session.rollback()
        if logo_uploaded:
            _discard_upload(storage, logo_uploaded, workspace_id)
        logger.error(f"[WORKSPACE] Error updating {workspace_id}: {e}")
        raise internal_error(e)

    if logo_uploaded and old_logo:
        _schedule_logo_deletion(storage, old_logo, workspace_id)

    logger.info(f"[WORKSPACE] ✓ Updated {prefix_workspace_id(workspace_id)}")
    return workspace


def delete_workspace(session, workspace: Project) -> None:
    """
    Delete a workspace and everything it owns.

    Domains, memberships, folders, programs and year-in-review records go
    with the workspace row; users pointing at it as their default lose the
    pointer; the stored logo is removed in the background.
    """
    workspace_id = workspace.id
    logo = workspace.logo

    try:
        session.query(User).filter(
            User.default_workspace == workspace.slug
        ).update({User.default_workspace: None}, synchronize_session=False)
        session.delete(workspace)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"[WORKSPACE] Error deleting {workspace_id}: {e}")
        raise internal_error(e)

    if logo:
        _schedule_logo_deletion(get_storage_service(), logo, workspace_id)

    logger.info(f"[WORKSPACE] ✓ Deleted {prefix_workspace_id(workspace_id)}")
