"""
Optional AI refinement of heuristic match scores.

For small result pools the top few candidates are rated by an external
chat-completions endpoint and their score becomes the mean of the heuristic
score and the returned rating. Any failure while rating abandons refinement
and the heuristic scores are returned untouched.
"""
import re
from concurrent.futures import ThreadPoolExecutor

import requests

SYSTEM_PROMPT = (
    "You are a skill matching assistant. Rate how well two users could "
    "exchange skills with each other. Reply with a single number between 0 and 1."
)

_LEADING_NUMBER = re.compile(r'^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?')


def parse_rating(text):
    """Read the leading number of a reply, 0.0 if there is none, clamped to [0, 1]."""
    if text is None:
        return 0.0
    found = _LEADING_NUMBER.match(str(text))
    if not found:
        return 0.0
    return min(max(float(found.group(0)), 0.0), 1.0)


def describe_skills(skills):
    return ', '.join(f"{skill['skill_type']}: {skill['skill_name']}" for skill in skills)


class RefinementClient:
    def __init__(self, gateway_url, api_key, model, timeout=10.0):
        self.gateway_url = gateway_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        """Build a client from app config, None when no API key is set."""
        if not config.get('AI_API_KEY'):
            return None
        return cls(
            gateway_url=config['AI_GATEWAY_URL'],
            api_key=config['AI_API_KEY'],
            model=config['AI_MODEL'],
            timeout=config.get('AI_TIMEOUT', 10.0),
        )

    def rate(self, requester_skills, candidate_skills):
        """
        Ask the completion service how compatible two skill sets are.

        Returns a rating in [0, 1], or None when the service answered with an
        error status. Transport errors propagate as ``requests.RequestException``.
        """
        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {
                    'role': 'user',
                    'content': (
                        f"User A skills: {describe_skills(requester_skills)}\n"
                        f"User B skills: {describe_skills(candidate_skills)}\n"
                        "How compatible are they for a skill exchange? "
                        "Reply with only a number between 0 and 1."
                    ),
                },
            ],
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }
        response = requests.post(self.gateway_url, json=payload, headers=headers, timeout=self.timeout)
        if not response.ok:
            print(f"[ERROR] Match refinement returned HTTP {response.status_code}")
            return None

        try:
            content = response.json()['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError):
            # Not JSON, or not the chat-completions shape
            content = None
        return parse_rating(content)


def refine_matches(matches, requester_skills, candidate_skills, client, max_pool=10, top_n=5):
    """
    Blend heuristic scores with AI ratings for the ``top_n`` best matches.

    Only runs when there are between 1 and ``max_pool`` matches and a client
    is available. ``candidate_skills`` maps user ids to skill rows. Always
    returns a new list sorted best first.
    """
    if client is None or not 0 < len(matches) <= max_pool:
        return sorted(matches, key=lambda match: match['score'], reverse=True)

    head, tail = matches[:top_n], matches[top_n:]

    def rate(match):
        return client.rate(requester_skills, candidate_skills.get(match['user_id'], []))

    try:
        with ThreadPoolExecutor(max_workers=len(head)) as pool:
            ratings = list(pool.map(rate, head))
    except Exception as e:
        print(f"[ERROR] Match refinement failed, keeping heuristic scores: {e!r}")
        return sorted(matches, key=lambda match: match['score'], reverse=True)

    refined = []
    for match, rating in zip(head, ratings):
        if rating is None:
            refined.append(dict(match))
        else:
            refined.append({**match, 'score': (match['score'] + rating) / 2})

    print(f"[DEBUG] Refined {len(refined)} of {len(matches)} matches.")
    return sorted(refined + [dict(match) for match in tail],
                  key=lambda match: match['score'], reverse=True)
