"""
Agreement lifecycle.

    pending --accept (provider)--> active --complete (either)--> completed
    pending --decline (provider)--> cancelled
    active  --cancel (either)-->   cancelled

``completed`` and ``cancelled`` are terminal.
"""
from skillswap.errors import TransitionError
from skillswap.utils import utcnow

PENDING = 'pending'
ACTIVE = 'active'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

STATUSES = (PENDING, ACTIVE, COMPLETED, CANCELLED)
TERMINAL_STATUSES = frozenset([COMPLETED, CANCELLED])

PROVIDER = 'provider'
EITHER = 'either'

# (from status, action) -> (to status, who may do it)
TRANSITIONS = {
    (PENDING, 'accept'): (ACTIVE, PROVIDER),
    (PENDING, 'decline'): (CANCELLED, PROVIDER),
    (ACTIVE, 'complete'): (COMPLETED, EITHER),
    (ACTIVE, 'cancel'): (CANCELLED, EITHER),
}

ACTIONS = frozenset(action for _, action in TRANSITIONS)


def party_role(agreement, user_id):
    if user_id == agreement.provider_id:
        return PROVIDER
    if user_id == agreement.seeker_id:
        return 'seeker'
    return None


def plan_transition(agreement, actor_id, action, now=None):
    """
    Work out the update ``action`` by ``actor_id`` makes to ``agreement``.

    Returns a dict with the new ``status`` and ``completed_at`` (set only when
    the agreement becomes completed). Raises TransitionError when the move is
    not allowed.
    """
    if action not in ACTIONS:
        raise TransitionError('unknown_action', f'Unknown action "{action}".')

    role = party_role(agreement, actor_id)
    if role is None:
        raise TransitionError('not_a_party', 'You are not a party to this agreement.')

    if agreement.status in TERMINAL_STATUSES:
        raise TransitionError('terminal_state', f'Agreement is already {agreement.status}.')

    transition = TRANSITIONS.get((agreement.status, action))
    if transition is None:
        raise TransitionError('illegal_transition',
                              f'Cannot {action} an agreement that is {agreement.status}.')

    to_status, allowed = transition
    if allowed == PROVIDER and role != PROVIDER:
        raise TransitionError('forbidden_actor', f'Only the provider can {action} this request.')

    return {
        'status': to_status,
        'completed_at': (now or utcnow()) if to_status == COMPLETED else None,
    }
