from .user import user
from .event import event
from .reward import reward
from .chat import chat_message
