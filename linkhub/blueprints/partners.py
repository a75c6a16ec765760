"""
Partner API blueprint - backs the eligible-partners picker of discounts.

GET /api/workspaces/<id_or_slug>/partners?search=&programId=&page=&pageSize=
GET /api/workspaces/<id_or_slug>/discounts/<discount_id>/partners
"""
from flask import Blueprint, current_app, g, jsonify, request

from linkhub.auth import with_workspace
from linkhub.database import get_session
from linkhub.schemas.partners import PartnersQuerySchema
from linkhub.services.partner_service import get_discount_partners, search_partners


partners_bp = Blueprint('partners', __name__, url_prefix='/api/workspaces')


@partners_bp.route('/<id_or_slug>/partners', methods=['GET'])
@with_workspace(required_permissions=['partners.read'])
def list_partners(id_or_slug):
    """Search the workspace's enrolled partners by name or email."""
    args = request.args.to_dict()
    args.setdefault('pageSize', current_app.config.get('PARTNERS_PAGE_SIZE', 100))
    query = PartnersQuerySchema.model_validate(args)
    partners = search_partners(
        get_session(),
        g.workspace.id,
        search=query.search,
        page=query.page,
        page_size=query.page_size,
        program_id=query.program_id,
    )
    return jsonify(partners)


@partners_bp.route('/<id_or_slug>/discounts/<discount_id>/partners', methods=['GET'])
@with_workspace(required_permissions=['partners.read'])
def list_discount_partners(id_or_slug, discount_id):
    """Partners currently eligible for a discount."""
    return jsonify(get_discount_partners(get_session(), g.workspace.id, discount_id))
