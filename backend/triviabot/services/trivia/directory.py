import requests
from flask import current_app

from triviabot import db
from triviabot.errors import DirectoryError, ValidationError
from triviabot.models import User


def fetch_slack_profile(external_id: str) -> dict:
    """Look a user up with Slack's ``users.info`` API.

    Returns ``{'display_name', 'image_url'}``; raises ``DirectoryError`` when
    Slack is unreachable or answers ``ok: false``.
    """
    cfg = current_app.config
    url = f"{cfg.get('SLACK_URL', 'https://slack.com').rstrip('/')}/api/users.info"
    try:
        response = requests.get(
            url,
            params={'user': external_id},
            headers={'Authorization': f"Bearer {cfg.get('SLACK_API_TOKEN', '')}"},
            timeout=int(cfg.get('SLACK_TIMEOUT_SEC', 10)),
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise DirectoryError(f"Can't reach Slack: {exc}") from exc

    if not data.get('ok'):
        raise DirectoryError(f"Slack users.info failed: {data.get('error', 'unknown error')}")

    profile = (data.get('user') or {}).get('profile') or {}
    name = profile.get('real_name') or ' '.join(
        part for part in (profile.get('first_name'), profile.get('last_name')) if part
    )
    return {
        'display_name': name or profile.get('display_name') or external_id,
        'image_url': profile.get('image_192'),
    }


def resolve_external_user(external_id: str) -> User:
    """Return the local user for a Slack id, creating or refreshing it."""
    if not external_id:
        raise ValidationError('Invalid user_id')

    if current_app.config.get('SLACK_API_TOKEN'):
        profile = fetch_slack_profile(external_id)
    else:
        profile = None

    user = User.query.filter_by(external_id=external_id).first()
    if user is None:
        user = User(external_id=external_id, display_name=external_id, points=0)
        db.session.add(user)
    if profile is not None:
        user.display_name = profile['display_name']
        user.image_url = profile['image_url']
    db.session.commit()
    return user
