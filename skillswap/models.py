from skillswap import db
from skillswap.utils import utcnow

SKILL_TYPES = ('offered', 'needed')
PROFICIENCY_LEVELS = ('beginner', 'intermediate', 'advanced', 'expert')


class Profile(db.Model):
    __tablename__ = 'profiles'

    # Subject claim issued by the identity provider
    id = db.Column(db.String(64), primary_key=True)
    bio = db.Column(db.Text, nullable=True)
    wallet_address = db.Column(db.String(42), nullable=True)
    reputation_points = db.Column(db.Integer, nullable=False, default=0)
    completed_exchange_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'bio': self.bio or '',
            'wallet_address': self.wallet_address,
            'reputation_points': self.reputation_points,
            'completed_exchange_count': self.completed_exchange_count,
        }


class Skill(db.Model):
    __tablename__ = 'skills'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), db.ForeignKey('profiles.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    skill_name = db.Column(db.String(255), nullable=False)
    skill_type = db.Column(db.String(20), nullable=False)
    proficiency_level = db.Column(db.String(20), nullable=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'skill_name': self.skill_name,
            'skill_type': self.skill_type,
            'proficiency_level': self.proficiency_level,
            'description': self.description,
        }


class Agreement(db.Model):
    __tablename__ = 'agreements'
    __table_args__ = (
        db.CheckConstraint('provider_id <> seeker_id', name='agreement_distinct_parties'),
    )

    id = db.Column(db.Integer, primary_key=True)
    provider_id = db.Column(db.String(64), db.ForeignKey('profiles.id', ondelete='CASCADE'),
                            nullable=False, index=True)
    seeker_id = db.Column(db.String(64), db.ForeignKey('profiles.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    skill_offered = db.Column(db.String(255), nullable=False)
    skill_needed = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending')
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'provider_id': self.provider_id,
            'seeker_id': self.seeker_id,
            'skill_offered': self.skill_offered,
            'skill_needed': self.skill_needed,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
        }
