from .database import Base, Session, engine, init_db
from .user import User, AuthToken
from .profile import Profile, DETAIL_FIELDS
from .interest import Interest, Message, PENDING, ACCEPTED, REJECTED, STATUSES
