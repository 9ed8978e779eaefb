# cuervo/users/router.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from cuervo.db.session import get_session
from cuervo.users.models import User
from cuervo.users.schemas import UserCreate, UserOut, TokenOut
from cuervo.users import service as svc
from cuervo.users.session import current_user

router = APIRouter(prefix="/api/users", tags=["users"])

@router.post("/register/", response_model=TokenOut)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_session)):
    try:
        token = await svc.register_user(db, payload)
        await db.commit()
        return {"access_token": token, "token_type": "bearer"}
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        await db.rollback()
        raise HTTPException(status_code=500, detail="internal error")

@router.post("/login/", response_model=TokenOut)
async def login(
    form: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
):
    """
    Acepta x-www-form-urlencoded con:
    - username (el email)
    - password
    """
    try:
        token = await svc.login_user(db, form.username, form.password)
        return {"access_token": token, "token_type": "bearer"}
    except ValueError:
        raise HTTPException(status_code=401, detail="invalid credentials")
    except Exception:
        raise HTTPException(status_code=500, detail="internal error")

@router.post("/logout/")
async def logout(
    auth: tuple[User, str] = Depends(current_user),
    db: AsyncSession = Depends(get_session),
):
    user, _ = auth
    try:
        await svc.logout_user(db, user)
        await db.commit()
    except Exception:
        await db.rollback()
        raise HTTPException(status_code=500, detail="internal error")
    return {"ok": True}

@router.get("/me/", response_model=UserOut)
async def me(auth: tuple[User, str] = Depends(current_user)):
    user, _ = auth
    return user
