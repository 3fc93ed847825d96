from collections import defaultdict

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import SQLAlchemyError

from skillswap import db
from skillswap.matching import rank_candidates
from skillswap.models import Profile, Skill
from skillswap.refinement import RefinementClient, refine_matches
from skillswap.utils import get_current_user_id

match_bp = Blueprint('match', __name__)


def skills_by_user(user_ids):
    """Fetch the skill rows of several users in one query, keyed by user id."""
    grouped = defaultdict(list)
    if not user_ids:
        return grouped

    skills = Skill.query.filter(Skill.user_id.in_(user_ids)).order_by(Skill.id).all()
    for skill in skills:
        grouped[skill.user_id].append(skill.to_dict())
    return grouped


# Browse other users who offer something
@match_bp.route('/browse', methods=['GET'])
@jwt_required()
def browse_users():
    """
    List every other user that offers at least one skill, with their bio,
    reputation and skills split into offered and needed.
    """
    try:
        current_user_id = get_current_user_id()

        others = Profile.query.filter(Profile.id != current_user_id).all()
        skills = skills_by_user([profile.id for profile in others])

        users_data = []
        for profile in others:
            user_skills = skills.get(profile.id, [])
            offered = [
                {
                    'skill_name': skill['skill_name'],
                    'proficiency_level': skill['proficiency_level'],
                    'description': skill['description'],
                }
                for skill in user_skills if skill['skill_type'] == 'offered'
            ]
            if not offered:
                continue

            users_data.append({
                'user_id': profile.id,
                'bio': profile.bio or '',
                'reputation': profile.reputation_points,
                'skills_offered': offered,
                'skills_needed': [
                    {'skill_name': skill['skill_name'], 'description': skill['description']}
                    for skill in user_skills if skill['skill_type'] == 'needed'
                ],
            })

        print(f"[DEBUG] Retrieved {len(users_data)} users offering skills for user ID {current_user_id}.")
        return jsonify(users_data), 200

    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to fetch users: {e}")
        return jsonify({'error': 'Failed to fetch users'}), 500


@match_bp.route('/find', methods=['POST'])
@jwt_required()
def find_matches():
    """
    Rank every other user by how well their skills complement the current
    user's, refining the top of small result sets with the AI service.
    """
    try:
        current_user_id = get_current_user_id()

        my_skills = [skill.to_dict() for skill in Skill.query.filter_by(user_id=current_user_id).all()]
        if not my_skills:
            return jsonify({'error': 'Please add your skills in your profile first', 'matches': []}), 400

        other_ids = [row.id for row in Profile.query.filter(Profile.id != current_user_id).all()]
        candidate_skills = skills_by_user(other_ids)

    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[ERROR] Failed to load skills for matching: {e}")
        return jsonify({'error': 'Failed to find matches'}), 500

    matches = rank_candidates(my_skills, candidate_skills)

    config = current_app.config
    matches = refine_matches(
        matches,
        my_skills,
        candidate_skills,
        RefinementClient.from_config(config),
        max_pool=config['MATCH_REFINE_MAX_POOL'],
        top_n=config['MATCH_REFINE_TOP_N'],
    )

    print(f"[DEBUG] Found {len(matches)} matches for user ID {current_user_id}.")
    if not matches:
        return jsonify({'matches': [], 'message': 'No matches found. Try adding more skills!'}), 200
    return jsonify({'matches': matches}), 200
