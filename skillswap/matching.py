"""
Skill overlap scoring.

A requester is compared with every candidate: each need of the requester
that a candidate offers, and each offer of the requester that a candidate
needs, adds ``PAIR_WEIGHT`` to the candidate's score. Names match when one
contains the other, ignoring case. Scores are capped at 1.0 and candidates
with no overlap are dropped.

The policy is pluggable: anything with a ``score(requester, candidate)``
method taking two ``SkillSet`` values and returning a float in [0, 1] can be
handed to ``rank_candidates``.
"""
from collections import namedtuple

SkillSet = namedtuple('SkillSet', ['needs', 'offers'])


def partition_skills(skills):
    """Split skill rows into lower-cased needed and offered names.

    Blank names are dropped, an empty string would otherwise be contained in
    every other name.
    """
    needs, offers = [], []
    for skill in skills:
        name = (skill.get('skill_name') or '').strip().lower()
        if not name:
            continue
        if skill.get('skill_type') == 'needed':
            needs.append(name)
        elif skill.get('skill_type') == 'offered':
            offers.append(name)
    return SkillSet(needs=needs, offers=offers)


def names_overlap(first, second):
    first, second = first.lower(), second.lower()
    return first in second or second in first


class SubstringOverlapPolicy:
    PAIR_WEIGHT = 0.5
    MAX_SCORE = 1.0

    def score(self, requester, candidate):
        total = 0.0

        # They offer what I need
        for need in requester.needs:
            for offer in candidate.offers:
                if names_overlap(need, offer):
                    total += self.PAIR_WEIGHT

        # I offer what they need
        for offer in requester.offers:
            for need in candidate.needs:
                if names_overlap(offer, need):
                    total += self.PAIR_WEIGHT

        return min(total, self.MAX_SCORE)


default_policy = SubstringOverlapPolicy()


def rank_candidates(requester_skills, candidate_skills, policy=None):
    """Score every candidate against the requester.

    ``requester_skills`` is a list of skill rows, ``candidate_skills`` maps a
    candidate user id to that candidate's skill rows. Returns a list of
    ``{'user_id': ..., 'score': ...}`` dicts, best first, without the
    candidates that scored zero.
    """
    policy = policy or default_policy
    requester = partition_skills(requester_skills)

    matches = []
    for user_id, skills in candidate_skills.items():
        score = policy.score(requester, partition_skills(skills))
        if score > 0:
            matches.append({'user_id': user_id, 'score': min(max(score, 0.0), 1.0)})

    matches.sort(key=lambda match: match['score'], reverse=True)
    return matches
