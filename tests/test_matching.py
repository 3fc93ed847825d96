"""Tests for skill overlap scoring."""

from skillswap.matching import (
    SkillSet,
    SubstringOverlapPolicy,
    names_overlap,
    partition_skills,
    rank_candidates,
)


def offered(name):
    return {'skill_name': name, 'skill_type': 'offered'}


def needed(name):
    return {'skill_name': name, 'skill_type': 'needed'}


def test_partition_lowercases_and_drops_blank_names():
    """Names are lower-cased and blank names never reach the scorer."""
    skills = [offered('Python '), needed('UI Design'), needed('   '), offered('')]

    result = partition_skills(skills)

    assert result == SkillSet(needs=['ui design'], offers=['python'])


def test_names_overlap_either_direction():
    assert names_overlap('design', 'ui/ux design')
    assert names_overlap('UI/UX Design', 'design')
    assert not names_overlap('ui design', 'ui/ux design')


def test_full_overlap_scores_one():
    """They offer what I need and I offer what they need."""
    me = [needed('design'), offered('python')]
    candidates = {'a': [offered('UI/UX Design'), needed('Python')]}

    assert rank_candidates(me, candidates) == [{'user_id': 'a', 'score': 1.0}]


def test_literal_example_only_matches_on_containment():
    """'ui design' is not contained in 'ui/ux design', only python matches."""
    me = [needed('ui design'), offered('python')]
    candidates = {'a': [offered('UI/UX Design'), needed('Python')]}

    assert rank_candidates(me, candidates) == [{'user_id': 'a', 'score': 0.5}]


def test_no_overlap_is_excluded():
    me = [needed('cooking')]
    candidates = {'b': [offered('painting')]}

    assert rank_candidates(me, candidates) == []


def test_score_is_capped_at_one():
    me = [needed('python'), needed('py'), needed('python scripting'), offered('guitar')]
    candidates = {'c': [offered('Python'), offered('Python Scripting'), needed('guitar'), needed('guitar lessons')]}

    matches = rank_candidates(me, candidates)

    assert len(matches) == 1
    assert matches[0]['score'] == 1.0


def test_one_score_per_candidate():
    """Several matching pairs add up to a single entry."""
    me = [needed('python')]
    candidates = {'d': [offered('python'), offered('advanced python')]}

    assert rank_candidates(me, candidates) == [{'user_id': 'd', 'score': 1.0}]


def test_heuristic_score_matches_in_both_directions():
    """Need/offer and offer/need pairs swap roles, the heuristic total does not change."""
    alice = [needed('python'), offered('french'), offered('chess')]
    bob = [offered('python'), offered('python tutoring'), needed('french')]
    policy = SubstringOverlapPolicy()

    forward = policy.score(partition_skills(alice), partition_skills(bob))
    backward = policy.score(partition_skills(bob), partition_skills(alice))

    assert forward == backward == 1.0


def test_results_sorted_best_first():
    me = [needed('python'), offered('spanish')]
    candidates = {
        'half': [offered('python')],
        'full': [offered('python'), needed('spanish')],
        'none': [offered('knitting')],
    }

    matches = rank_candidates(me, candidates)

    assert [match['user_id'] for match in matches] == ['full', 'half']
    assert all(0 <= match['score'] <= 1 for match in matches)


def test_candidate_without_skills_is_excluded():
    assert rank_candidates([needed('python')], {'empty': []}) == []


def test_custom_policy_is_used():
    class FixedPolicy:
        def score(self, requester, candidate):
            return 0.25 if candidate.offers else 0.0

    matches = rank_candidates([needed('x')], {'a': [offered('y')], 'b': []}, policy=FixedPolicy())

    assert matches == [{'user_id': 'a', 'score': 0.25}]


def test_default_policy_weights():
    policy = SubstringOverlapPolicy()
    requester = SkillSet(needs=['python'], offers=[])
    candidate = SkillSet(needs=[], offers=['python'])

    assert policy.score(requester, candidate) == SubstringOverlapPolicy.PAIR_WEIGHT
