"""Partner lookups scoped to a workspace's programs."""
from typing import List, Optional

from sqlalchemy import or_, select

from linkhub.exceptions import NotFoundError
from linkhub.models import Discount, Partner, Program, ProgramEnrollment
from linkhub.schemas.partners import EnrolledPartnerSchema


def _enrolled_partner(partner: Partner, enrollment: Optional[ProgramEnrollment] = None) -> dict:
    return EnrolledPartnerSchema(
        id=partner.id,
        name=partner.name,
        email=partner.email,
        image=partner.image,
        status=enrollment.status if enrollment else None,
        program_id=enrollment.program_id if enrollment else None,
        discount_id=enrollment.discount_id if enrollment else None,
    ).model_dump(by_alias=True)


def search_partners(session, workspace_id: str, search: Optional[str] = None,
                    page: int = 1, page_size: int = 100, program_id: Optional[str] = None) -> List[dict]:
    """
    Partners enrolled in the workspace's programs, optionally filtered by a
    case-insensitive match on name or email.

    Each partner appears once. With program_id the listing is limited to that
    program and carries the partner's enrollment in it; across all programs
    the enrollment fields are left empty.
    """
    if program_id:
        query = session.query(Partner, ProgramEnrollment).join(
            ProgramEnrollment, ProgramEnrollment.partner_id == Partner.id
        ).join(
            Program, Program.id == ProgramEnrollment.program_id
        ).filter(
            Program.workspace_id == workspace_id,
            Program.id == program_id
        )
    else:
        enrolled = select(ProgramEnrollment.partner_id).join(
            Program, Program.id == ProgramEnrollment.program_id
        ).where(Program.workspace_id == workspace_id)
        query = session.query(Partner).filter(Partner.id.in_(enrolled))

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Partner.name.ilike(pattern), Partner.email.ilike(pattern)))

    rows = query.order_by(Partner.name, Partner.id)\
        .offset((page - 1) * page_size)\
        .limit(page_size)\
        .all()
    if program_id:
        return [_enrolled_partner(partner, enrollment) for partner, enrollment in rows]
    return [_enrolled_partner(partner) for partner in rows]


def get_discount_partners(session, workspace_id: str, discount_id: str) -> List[dict]:
    """Partners currently eligible for a discount of the workspace."""
    discount = session.query(Discount).join(
        Program, Program.id == Discount.program_id
    ).filter(
        Discount.id == discount_id,
        Program.workspace_id == workspace_id
    ).first()
    if not discount:
        raise NotFoundError('Discount not found.')

    rows = session.query(Partner, ProgramEnrollment).join(
        ProgramEnrollment, ProgramEnrollment.partner_id == Partner.id
    ).filter(
        ProgramEnrollment.discount_id == discount.id
    ).order_by(Partner.name, Partner.id).all()
    return [_enrolled_partner(partner, enrollment) for partner, enrollment in rows]
