"""Images and channel messages shown on the TV display."""
from typing import List, Optional
from urllib.parse import urlparse
import time

from triviabot import db
from triviabot.errors import NotFound, ValidationError
from triviabot.models import Image, Message

MAX_MESSAGES = 100


def add_image(user_id: int, url: str) -> Image:
    parsed = urlparse(url or '')
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValidationError('Invalid image URL')
    image = Image(user_id=user_id, url=url)
    db.session.add(image)
    db.session.commit()
    return image


def get_latest_image() -> Image:
    image = Image.query.order_by(Image.created_at.desc(), Image.id.desc()).first()
    if image is None:
        raise NotFound('Last image not found')
    return image


def add_message(user_id: int, text: str, posted_at: Optional[float] = None) -> Message:
    if not text or not text.strip():
        raise ValidationError('Message text is required')
    message = Message(user_id=user_id, text=text, posted_at=posted_at or time.time())
    db.session.add(message)
    db.session.commit()
    return message


def get_messages(count: int = 20) -> List[Message]:
    if not 1 <= count <= MAX_MESSAGES:
        raise ValidationError(f'count must be between 1 and {MAX_MESSAGES}')
    return Message.query.order_by(Message.posted_at.desc(), Message.id.desc()).limit(count).all()
