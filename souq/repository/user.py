from sqlalchemy import func
from sqlalchemy.orm import Session
from souq.model.user import User
from souq.model.user_schema import UserCreate
from souq.auth.utils import hash_password


def create_user(db: Session, data: UserCreate, role: str = None):
    hashed_pw = hash_password(data.password)
    new_user = User(
        email=data.email.lower(),
        display_name=data.display_name,
        password=hashed_pw,
        role=role or data.role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


def get_user(db: Session, email: str = None, id: str = None):
    query = db.query(User)
    if id:
        query = query.filter(User.id == id)
    if email:
        query = query.filter(func.lower(User.email) == email.strip().lower())
    return query.first()
