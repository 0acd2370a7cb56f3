from uuid import UUID

from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select
from pocketbook.models.user import User
from pocketbook.schemas.user import UserCreate, UserRead
from pocketbook.core.logging import get_logger
from pocketbook.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    get_current_user,
)
from pocketbook.database import get_session

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


# Registro
@router.post("/register", response_model=UserRead)
def register(user_create: UserCreate, session: Session = Depends(get_session)):
    user_exists = session.exec(select(User).where(User.email == user_create.email)).first()
    if user_exists:
        raise HTTPException(status_code=400, detail="Email ya registrado")

    hashed_pwd = get_password_hash(user_create.password)
    user = User(email=user_create.email, hashed_password=hashed_pwd, full_name=user_create.full_name)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("user_registered", user_id=str(user.id))
    return user


# Login
@router.post("/login")
def login(form_data: OAuth2PasswordRequestForm = Depends(), session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.email == form_data.username)).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.warning("login_failed", email=form_data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales incorrectas")

    access_token = create_access_token(data={"sub": str(user.id)})
    return {"access_token": access_token, "token_type": "bearer"}


# Ruta protegida
@router.get("/me")
def read_users_me(user_id: UUID = Depends(get_current_user)):
    return {"user_id": str(user_id)}
