"""Authentication and workspace context for API routes."""
from functools import wraps
from flask import session, g, current_app
from linkhub.database import get_session
from linkhub.exceptions import ApiError, NotFoundError, UnauthorizedError
from linkhub.models import User, ProjectUsers


# Permission map by workspace role
PERMISSION_MAP = {
    'owner': 'all',  # Owner has all permissions
    'member': [
        'workspaces.read',
        'domains.read',
        'folders.read', 'folders.write',
        'partners.read',
        'programs.read',
    ],
}


def has_permissions(role: str, permissions) -> bool:
    """Check that a workspace role grants every listed permission."""
    role_permissions = PERMISSION_MAP.get(role, [])
    if role_permissions == 'all':
        return True
    return all(permission in role_permissions for permission in permissions)


def load_user():
    """
    Load current user into g (Flask's per-request global).

    Called before each request; sets g.user when the session is authenticated.
    """
    g.user = None
    g.workspace = None
    g.membership = None

    try:
        user_id = session.get('user_id')
        if user_id:
            db_session = get_session()
            if not db_session:
                return
            g.user = db_session.query(User).filter_by(id=user_id).first()
    except Exception as e:
        # Avoid crashing the whole app if context loading fails
        current_app.logger.error(f"Error in load_user: {e}")


def with_workspace(required_permissions=()):
    """
    Decorator: resolve the route's workspace and check the caller's permissions.

    The route must take an ``id_or_slug`` argument ('ws_<id>', raw id or slug).
    Sets g.workspace and g.membership. Non-members get not_found so that
    workspace existence is not disclosed.

    Usage:
        @workspaces_bp.route('/<id_or_slug>')
        @with_workspace(required_permissions=['workspaces.read'])
        def get_workspace(id_or_slug):
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if g.get('user') is None:
                raise ApiError('unauthorized', 'Unauthorized: Login required.')

            from linkhub.services.workspace_service import get_workspace_by_id_or_slug

            db_session = get_session()
            workspace = get_workspace_by_id_or_slug(db_session, kwargs['id_or_slug'])
            membership = None
            if workspace:
                membership = db_session.query(ProjectUsers).filter_by(
                    user_id=g.user.id,
                    project_id=workspace.id
                ).first()

            if not workspace or not membership:
                raise NotFoundError('Workspace not found.')

            if not has_permissions(membership.role, required_permissions):
                raise UnauthorizedError(
                    f"Requires {', '.join(required_permissions)} permission(s) on this workspace."
                )

            g.workspace = workspace
            g.membership = membership
            return f(*args, **kwargs)
        return decorated_function
    return decorator
