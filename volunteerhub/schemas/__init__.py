from . import auth, user, credit, event, reward, chat
