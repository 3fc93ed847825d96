import re

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from skillswap import db
from skillswap.agreements import ACTIVE
from skillswap.errors import NotFoundError, SkillSwapError, ValidationError
from skillswap.models import PROFICIENCY_LEVELS, SKILL_TYPES, Agreement, Profile, Skill
from skillswap.utils import get_current_user_id

WALLET_ADDRESS = re.compile(r'^0x[0-9a-fA-F]{40}$')
MAX_SKILL_NAME_LENGTH = 255

profile_bp = Blueprint('profile', __name__)


def validate_skill(data):
    """Check a new skill payload and return the column values for it."""
    name = (data.get('skill_name') or data.get('name') or '').strip()
    if not name:
        raise ValidationError('Please enter a skill name')
    if len(name) > MAX_SKILL_NAME_LENGTH:
        raise ValidationError(f'Skill name must be at most {MAX_SKILL_NAME_LENGTH} characters')

    skill_type = data.get('skill_type') or data.get('type')
    if skill_type not in SKILL_TYPES:
        raise ValidationError('Skill type must be "offered" or "needed"')

    proficiency = None
    if skill_type == 'offered':
        proficiency = data.get('proficiency_level') or data.get('proficiency') or 'intermediate'
        if proficiency not in PROFICIENCY_LEVELS:
            raise ValidationError(f"Proficiency must be one of: {', '.join(PROFICIENCY_LEVELS)}")

    description = (data.get('description') or '').strip() or None
    return {
        'skill_name': name,
        'skill_type': skill_type,
        'proficiency_level': proficiency,
        'description': description,
    }


def validate_wallet_address(address):
    if address in (None, ''):
        return None
    if not isinstance(address, str) or not WALLET_ADDRESS.match(address):
        raise ValidationError('Wallet address must be 0x followed by 40 hex characters')
    return address


@profile_bp.route('/view', methods=['GET'])
@jwt_required()
def view_profile():
    try:
        user_id = get_current_user_id()
        profile = db.session.get(Profile, user_id)
        skills = Skill.query.filter_by(user_id=user_id).order_by(Skill.created_at.desc(), Skill.id.desc()).all()

        profile_data = profile.to_dict()
        profile_data['skills'] = [skill.to_dict() for skill in skills]
        return jsonify(profile_data), 200

    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to fetch profile: {e}")
        return jsonify({'error': 'Failed to fetch profile'}), 500


@profile_bp.route('/update', methods=['PUT'])
@jwt_required()
def update_profile():
    data = request.get_json(silent=True) or {}

    try:
        user_id = get_current_user_id()
        profile = db.session.get(Profile, user_id)

        if 'bio' in data:
            profile.bio = data.get('bio')
        if 'wallet_address' in data:
            profile.wallet_address = validate_wallet_address(data.get('wallet_address'))

        db.session.commit()
        print(f"[DEBUG] Profile updated for user ID {user_id}.")
        return jsonify({'message': 'Profile updated successfully!', 'profile': profile.to_dict()}), 200

    except SkillSwapError as e:
        db.session.rollback()
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to update profile: {e}")
        return jsonify({'error': 'Failed to update profile'}), 500


@profile_bp.route('/skills', methods=['POST'])
@jwt_required()
def add_skill():
    data = request.get_json(silent=True) or {}

    try:
        user_id = get_current_user_id()
        skill = Skill(user_id=user_id, **validate_skill(data))
        db.session.add(skill)
        db.session.commit()

        print(f"[DEBUG] User {user_id} added {skill.skill_type} skill '{skill.skill_name}'.")
        return jsonify({'message': 'Skill added successfully!', 'skill': skill.to_dict()}), 201

    except SkillSwapError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to add skill: {e}")
        return jsonify({'error': 'Failed to add skill'}), 500


@profile_bp.route('/skills/<int:skill_id>', methods=['DELETE'])
@jwt_required()
def delete_skill(skill_id):
    try:
        user_id = get_current_user_id()

        # Owners only; someone else's skill looks the same as a missing one
        skill = Skill.query.filter_by(id=skill_id, user_id=user_id).first()
        if not skill:
            raise NotFoundError('Skill not found')

        db.session.delete(skill)
        db.session.commit()
        return jsonify({'message': 'Skill deleted successfully!'}), 200

    except SkillSwapError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to delete skill {skill_id}: {e}")
        return jsonify({'error': 'Failed to delete skill'}), 500


@profile_bp.route('/dashboard', methods=['GET'])
@jwt_required()
def dashboard():
    try:
        user_id = get_current_user_id()
        profile = db.session.get(Profile, user_id)

        active_agreements = Agreement.query.filter(
            Agreement.status == ACTIVE,
            or_(Agreement.provider_id == user_id, Agreement.seeker_id == user_id),
        ).count()
        skills_offered = Skill.query.filter_by(user_id=user_id, skill_type='offered').count()

        return jsonify({
            'reputation': profile.reputation_points,
            'active_agreements': active_agreements,
            'skills_offered': skills_offered,
            'completed_exchanges': profile.completed_exchange_count,
        }), 200

    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to load dashboard: {e}")
        return jsonify({'error': 'Failed to load dashboard'}), 500
