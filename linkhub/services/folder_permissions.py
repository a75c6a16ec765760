"""Folder-level authorization."""
import logging
from typing import Optional

from linkhub.exceptions import NotFoundError, UnauthorizedError
from linkhub.models import Folder, FolderUser, FolderAccessLevel, FolderUserRole

logger = logging.getLogger(__name__)

FOLDER_ROLE_PERMISSIONS = {
    FolderUserRole.OWNER.value: ['folders.read', 'folders.write', 'folders.users.write'],
    FolderUserRole.EDITOR.value: ['folders.read', 'folders.write'],
    FolderUserRole.VIEWER.value: ['folders.read'],
}

# Role implied by a folder's workspace-wide access level
ACCESS_LEVEL_ROLES = {
    FolderAccessLevel.WRITE.value: FolderUserRole.EDITOR.value,
    FolderAccessLevel.READ.value: FolderUserRole.VIEWER.value,
}


def get_folder_role(session, folder: Folder, user_id: str) -> Optional[str]:
    """Explicit folder role of a user, falling back to the folder's access level."""
    folder_user = session.query(FolderUser).filter_by(
        folder_id=folder.id,
        user_id=user_id
    ).first()
    if folder_user:
        return folder_user.role
    return ACCESS_LEVEL_ROLES.get(folder.access_level)


def verify_folder_access(session, workspace, user_id: str, folder_id: str, required_permission: str) -> Folder:
    """
    Ensure a user holds a permission on a folder of the workspace.

    Raises:
        ApiError: not_found if the folder is not in the workspace,
                  forbidden if the user's folder role lacks the permission
    """
    folder = session.query(Folder).filter(
        Folder.id == folder_id,
        Folder.project_id == workspace.id
    ).first()
    if not folder:
        raise NotFoundError('Folder not found in workspace.')

    role = get_folder_role(session, folder, user_id)
    if not role or required_permission not in FOLDER_ROLE_PERMISSIONS.get(role, []):
        logger.warning(f"[FOLDERS] User {user_id} denied '{required_permission}' on folder {folder_id}")
        raise UnauthorizedError('You are not allowed to perform this action on this folder.')
    return folder
