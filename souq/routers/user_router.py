from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from souq.db.session import get_db
from souq.repository.user import create_user, get_user
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.repository.store_repository import get_store_by_owner
from souq.model.user_schema import UserCreate, UserResponse, UserLogin, TokenResponse
from souq.auth.utils import verify_password, create_access_token, get_current_user
from souq.auth.fallback import fallback_sign_in

router = APIRouter(prefix="/user", tags=["User"])


def _store_id_for(docs: HybridDocumentStore, user_id: str, role: str):
    if role != "merchant":
        return None
    store = get_store_by_owner(docs, user_id)
    return store.id if store else None


@router.post("/register", response_model=UserResponse)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    user_exist = get_user(db, email=user_data.email)
    if user_exist:
        raise HTTPException(status_code=400, detail="Email already registered")

    return create_user(db, user_data)


@router.post("/login", response_model=TokenResponse)
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    docs: HybridDocumentStore = Depends(get_document_store),
):
    user = get_user(db, email=data.email)
    if user and user.is_active and verify_password(data.password, user.password):
        token = create_access_token(
            {"sub": user.id, "email": user.email, "role": user.role, "provider": "local"}
        )
        return TokenResponse(
            access_token=token,
            id=user.id,
            role=user.role,
            store_id=_store_id_for(docs, user.id, user.role),
        )

    fallback_user = fallback_sign_in(data.email, data.password)
    if not fallback_user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        {
            "sub": fallback_user["uid"],
            "email": fallback_user["email"],
            "role": fallback_user["role"],
            "provider": "fallback",
        }
    )
    return TokenResponse(
        access_token=token,
        id=fallback_user["uid"],
        role=fallback_user["role"],
        store_id=_store_id_for(docs, fallback_user["uid"], fallback_user["role"]),
        fallback=True,
    )


@router.get("/me")
def me(user: dict = Depends(get_current_user)):
    return user


@router.get("/{id}", response_model=UserResponse)
def get_user_by_id(id: str, db: Session = Depends(get_db)):
    user = get_user(db, id=id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
