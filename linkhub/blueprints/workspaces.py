"""
Workspace API blueprint.

GET    /api/workspaces/<id_or_slug>  - workspace with domains, flags and year in review
PATCH  /api/workspaces/<id_or_slug>  - partial update (PUT is an alias)
DELETE /api/workspaces/<id_or_slug>  - delete the workspace and everything it owns
"""
from flask import Blueprint, g, jsonify

from linkhub.auth import with_workspace
from linkhub.database import get_session
from linkhub.models import Domain, ProjectUsers, YearInReview
from linkhub.schemas.workspaces import serialize_workspace, serialize_year_in_review, validate_update_workspace
from linkhub.services.feature_flags import get_feature_flags
from linkhub.services.workspace_service import delete_workspace, update_workspace
from linkhub.utils.api import parse_request_body


workspaces_bp = Blueprint('workspaces', __name__, url_prefix='/api/workspaces')

YEAR_IN_REVIEW_YEAR = 2024
MAX_DOMAINS = 100


@workspaces_bp.route('/<id_or_slug>', methods=['GET'])
@with_workspace(required_permissions=['workspaces.read'])
def get_workspace(id_or_slug):
    """Get a specific workspace by id or slug."""
    session = get_session()
    workspace = g.workspace

    domains = session.query(Domain).filter(
        Domain.project_id == workspace.id
    ).order_by(Domain.created_at).limit(MAX_DOMAINS).all()

    year_in_review = session.query(YearInReview).filter_by(
        workspace_id=workspace.id,
        year=YEAR_IN_REVIEW_YEAR
    ).first()

    payload = serialize_workspace(
        workspace,
        users=[g.membership],
        domains=domains,
        flags=get_feature_flags(workspace_id=workspace.id),
    )
    payload['yearInReview'] = serialize_year_in_review(year_in_review)
    return jsonify(payload)


@workspaces_bp.route('/<id_or_slug>', methods=['PATCH', 'PUT'])
@with_workspace(required_permissions=['workspaces.write'])
def patch_workspace(id_or_slug):
    """Update a specific workspace by id or slug."""
    session = get_session()
    data = validate_update_workspace(parse_request_body())

    workspace = update_workspace(session, g.workspace, g.user.id, data)

    members = session.query(ProjectUsers).filter_by(project_id=workspace.id).all()
    return jsonify(serialize_workspace(
        workspace,
        users=members,
        domains=workspace.domains,
        flags=get_feature_flags(workspace_id=workspace.id),
    ))


@workspaces_bp.route('/<id_or_slug>', methods=['DELETE'])
@with_workspace(required_permissions=['workspaces.write'])
def remove_workspace(id_or_slug):
    """Delete a specific workspace, returning its last state."""
    session = get_session()
    workspace = g.workspace

    snapshot = serialize_workspace(workspace, users=[g.membership], domains=workspace.domains)
    delete_workspace(session, workspace)
    return jsonify(snapshot)
