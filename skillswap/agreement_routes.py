from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from skillswap import db
from skillswap.agreements import COMPLETED, PENDING, STATUSES, party_role, plan_transition
from skillswap.errors import NotFoundError, SkillSwapError, TransitionError, ValidationError
from skillswap.events import notify_agreement
from skillswap.models import Agreement, Profile, Skill
from skillswap.utils import get_current_user_id

agreement_bp = Blueprint('agreements', __name__)


def first_skill_name(user_id, skill_type):
    skill = Skill.query.filter_by(user_id=user_id, skill_type=skill_type).order_by(Skill.id).first()
    return skill.skill_name if skill else None


def propose_agreement(seeker_id, provider_id, skill_offered=None, skill_needed=None):
    """Create a pending agreement in which ``seeker_id`` asks ``provider_id`` for a skill."""
    if not provider_id:
        raise ValidationError('provider_id is required')
    if provider_id == seeker_id:
        raise ValidationError('You cannot propose an exchange with yourself')
    if db.session.get(Profile, provider_id) is None:
        raise NotFoundError('Provider not found')

    skill_offered = (skill_offered or '').strip() or first_skill_name(provider_id, 'offered')
    if not skill_offered:
        raise ValidationError('This user does not offer any skills yet')

    skill_needed = (skill_needed or '').strip() or first_skill_name(seeker_id, 'needed')
    if not skill_needed:
        raise ValidationError('Please add skills you need in your profile first')

    existing = Agreement.query.filter_by(
        provider_id=provider_id, seeker_id=seeker_id, skill_offered=skill_offered, status=PENDING
    ).first()
    if existing:
        raise ValidationError('You already have a pending request for this skill.')

    agreement = Agreement(
        provider_id=provider_id,
        seeker_id=seeker_id,
        skill_offered=skill_offered,
        skill_needed=skill_needed,
        status=PENDING,
        completed_at=None,
    )
    db.session.add(agreement)
    db.session.commit()
    return agreement


def award_reputation(agreement, points):
    Profile.query.filter(Profile.id.in_([agreement.provider_id, agreement.seeker_id])).update(
        {
            Profile.reputation_points: Profile.reputation_points + points,
            Profile.completed_exchange_count: Profile.completed_exchange_count + 1,
        },
        synchronize_session=False,
    )


def apply_transition(agreement, actor_id, action):
    """
    Move ``agreement`` along its lifecycle on behalf of ``actor_id``.

    The update only lands if the stored status still matches the status the
    decision was made on; otherwise a ``stale_status`` TransitionError is
    raised and nothing changes.
    """
    expected_status = agreement.status
    changes = plan_transition(agreement, actor_id, action)

    updated = Agreement.query.filter_by(id=agreement.id, status=expected_status).update(
        changes, synchronize_session=False
    )
    if updated == 0:
        db.session.rollback()
        raise TransitionError('stale_status', 'Agreement was changed by someone else, please reload.')

    if changes['status'] == COMPLETED:
        award_reputation(agreement, current_app.config['REPUTATION_POINTS_PER_EXCHANGE'])

    db.session.commit()
    db.session.refresh(agreement)
    return agreement


def get_agreement_for(agreement_id, user_id):
    agreement = db.session.get(Agreement, agreement_id)
    if agreement is None or party_role(agreement, user_id) is None:
        raise NotFoundError('Agreement not found')
    return agreement


@agreement_bp.route('/create', methods=['POST'])
@jwt_required()
def create_agreement():
    data = request.get_json(silent=True) or {}

    try:
        seeker_id = get_current_user_id()
        provider_id = data.get('provider_id')
        agreement = propose_agreement(
            seeker_id,
            str(provider_id) if provider_id is not None else None,
            skill_offered=data.get('skill_offered'),
            skill_needed=data.get('skill_needed'),
        )
        print(f"[DEBUG] Agreement {agreement.id} proposed by {seeker_id} to {agreement.provider_id}.")
        notify_agreement(agreement, 'agreement_created', seeker_id)

        return jsonify({'message': 'Agreement request sent!', 'agreement': agreement.to_dict()}), 201

    except SkillSwapError as e:
        db.session.rollback()
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to create agreement: {e}")
        return jsonify({'error': 'Failed to create agreement'}), 500


@agreement_bp.route('/view', methods=['GET'])
@jwt_required()
def view_agreements():
    status = request.args.get('status')
    if status is not None and status not in STATUSES:
        return jsonify({'error': f"Invalid status. Use one of: {', '.join(STATUSES)}."}), 400

    try:
        user_id = get_current_user_id()
        query = Agreement.query.filter(or_(Agreement.provider_id == user_id, Agreement.seeker_id == user_id))
        if status:
            query = query.filter(Agreement.status == status)
        agreements = query.order_by(Agreement.created_at.desc(), Agreement.id.desc()).all()

        agreements_data = []
        for agreement in agreements:
            agreement_data = agreement.to_dict()
            agreement_data['role'] = party_role(agreement, user_id)
            agreements_data.append(agreement_data)
        return jsonify(agreements_data), 200

    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to fetch agreements: {e}")
        return jsonify({'error': 'Failed to fetch agreements'}), 500


@agreement_bp.route('/<int:agreement_id>', methods=['GET'])
@jwt_required()
def view_agreement(agreement_id):
    try:
        user_id = get_current_user_id()
        agreement = get_agreement_for(agreement_id, user_id)
        agreement_data = agreement.to_dict()
        agreement_data['role'] = party_role(agreement, user_id)
        return jsonify(agreement_data), 200

    except SkillSwapError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to fetch agreement {agreement_id}: {e}")
        return jsonify({'error': 'Failed to fetch agreement'}), 500


# accept, decline, complete or cancel an agreement
@agreement_bp.route('/<int:agreement_id>/<action>', methods=['POST'])
@jwt_required()
def update_agreement(agreement_id, action):
    try:
        user_id = get_current_user_id()
        agreement = get_agreement_for(agreement_id, user_id)
        agreement = apply_transition(agreement, user_id, action)

        print(f"[DEBUG] Agreement {agreement_id} is now {agreement.status} ({action} by {user_id}).")
        notify_agreement(agreement, 'agreement_updated', user_id)

        return jsonify({'message': f'Agreement {agreement.status}!', 'agreement': agreement.to_dict()}), 200

    except SkillSwapError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to update agreement {agreement_id}: {e}")
        return jsonify({'error': 'Failed to update agreement'}), 500
