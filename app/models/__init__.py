from app.models.base import IDModel, OwnedModel, TimestampModel
from app.models.conversation import Conversation, Message
from app.models.event import Event
from app.models.memory import Memory
from app.models.profile import Profile

__all__ = [
    'IDModel',
    'OwnedModel',
    'TimestampModel',
    'Conversation',
    'Event',
    'Memory',
    'Message',
    'Profile',
]
