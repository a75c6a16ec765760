"""Program API blueprint."""
from flask import Blueprint, g, jsonify

from linkhub.auth import with_workspace
from linkhub.database import get_session
from linkhub.exceptions import NotFoundError
from linkhub.models import Program
from linkhub.schemas.program_application_form import parse_application_form_fields
from linkhub.services.application_form import form_data_for_application_form_data


programs_bp = Blueprint('programs', __name__, url_prefix='/api/workspaces')


@programs_bp.route('/<id_or_slug>/programs/<program_id>/application-form', methods=['GET'])
@with_workspace(required_permissions=['programs.read'])
def get_application_form(id_or_slug, program_id):
    """Empty, fillable form data for a program's application form."""
    session = get_session()
    program = session.query(Program).filter(
        Program.id == program_id,
        Program.workspace_id == g.workspace.id
    ).first()
    if not program:
        raise NotFoundError('Program not found.')

    fields = parse_application_form_fields(program.application_form_data)
    return jsonify(form_data_for_application_form_data(fields))
