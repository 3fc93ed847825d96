"""Tests for profile and skill endpoints."""

WALLET = '0x' + 'ab' * 20


def test_requires_token(client):
    assert client.get('/profile/view').status_code == 401


def test_view_creates_profile_on_first_use(client, auth_headers):
    response = client.get('/profile/view', headers=auth_headers('alice'))

    assert response.status_code == 200
    data = response.get_json()
    assert data['id'] == 'alice'
    assert data['reputation_points'] == 0
    assert data['skills'] == []


def test_update_bio_and_wallet(client, auth_headers):
    headers = auth_headers('alice')

    response = client.put('/profile/update', json={'bio': 'Hi', 'wallet_address': WALLET}, headers=headers)
    assert response.status_code == 200

    data = client.get('/profile/view', headers=headers).get_json()
    assert data['bio'] == 'Hi'
    assert data['wallet_address'] == WALLET


def test_update_rejects_bad_wallet(client, auth_headers):
    response = client.put('/profile/update', json={'wallet_address': '0x123'}, headers=auth_headers('alice'))

    assert response.status_code == 400
    assert 'Wallet address' in response.get_json()['error']


def test_clear_wallet(client, auth_headers):
    headers = auth_headers('alice')
    client.put('/profile/update', json={'wallet_address': WALLET}, headers=headers)

    client.put('/profile/update', json={'wallet_address': None}, headers=headers)

    assert client.get('/profile/view', headers=headers).get_json()['wallet_address'] is None


def test_add_offered_skill_defaults_proficiency(add_skill):
    skill = add_skill('alice', 'Python', 'offered')

    assert skill['skill_name'] == 'Python'
    assert skill['proficiency_level'] == 'intermediate'


def test_needed_skill_has_no_proficiency(add_skill):
    skill = add_skill('alice', 'Guitar', 'needed', proficiency_level='expert')

    assert skill['proficiency_level'] is None


def test_add_skill_validation(client, auth_headers):
    headers = auth_headers('alice')

    blank = client.post('/profile/skills', json={'skill_name': '  ', 'skill_type': 'offered'}, headers=headers)
    bad_type = client.post('/profile/skills', json={'skill_name': 'Python', 'skill_type': 'wanted'}, headers=headers)
    bad_level = client.post('/profile/skills', json={
        'skill_name': 'Python', 'skill_type': 'offered', 'proficiency_level': 'guru',
    }, headers=headers)

    assert blank.status_code == 400
    assert blank.get_json()['error'] == 'Please enter a skill name'
    assert bad_type.status_code == 400
    assert bad_level.status_code == 400


def test_duplicate_skill_names_allowed(client, auth_headers, add_skill):
    add_skill('alice', 'Python', 'offered')
    add_skill('alice', 'Python', 'offered')

    skills = client.get('/profile/view', headers=auth_headers('alice')).get_json()['skills']
    assert len(skills) == 2


def test_delete_own_skill_only(client, auth_headers, add_skill):
    skill = add_skill('alice', 'Python', 'offered')

    other = client.delete(f"/profile/skills/{skill['id']}", headers=auth_headers('bob'))
    assert other.status_code == 404

    own = client.delete(f"/profile/skills/{skill['id']}", headers=auth_headers('alice'))
    assert own.status_code == 200
    assert client.get('/profile/view', headers=auth_headers('alice')).get_json()['skills'] == []


def test_dashboard_counts(client, auth_headers, add_skill):
    add_skill('alice', 'Python', 'offered')
    add_skill('alice', 'Go', 'offered')
    add_skill('alice', 'Guitar', 'needed')

    data = client.get('/profile/dashboard', headers=auth_headers('alice')).get_json()

    assert data == {
        'reputation': 0,
        'active_agreements': 0,
        'skills_offered': 2,
        'completed_exchanges': 0,
    }
