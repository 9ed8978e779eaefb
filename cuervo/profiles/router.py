# cuervo/profiles/router.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cuervo.core.errors import ProfileError
from cuervo.db.session import get_session
from cuervo.profiles.controller import ProfileController
from cuervo.profiles.repository import SqlProfileGateway
from cuervo.profiles.schemas import Profile, ProfileIn, ProfileActionOut
from cuervo.users.session import AuthSession, current_session

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


async def _controller(
    db: AsyncSession = Depends(get_session),
    session: AuthSession = Depends(current_session),
) -> ProfileController:
    # cada request arranca con la colección recién cargada del dueño
    ctl = ProfileController(session, SqlProfileGateway(db))
    try:
        await ctl.reload()
    except ProfileError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ctl


async def _commit_or_fail(db: AsyncSession, op) -> str:
    try:
        message = await op
        await db.commit()
        return message
    except ProfileError as e:
        await db.rollback()
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        await db.rollback()
        raise HTTPException(status_code=500, detail="internal error")


# ---------------------------
# GET /api/profiles/
# ---------------------------
@router.get("/", response_model=List[Profile])
async def list_my_profiles(ctl: ProfileController = Depends(_controller)):
    return list(ctl.profiles)


# ---------------------------
# POST /api/profiles/
# ---------------------------
@router.post("/", response_model=ProfileActionOut, status_code=status.HTTP_201_CREATED)
async def create_profile_endpoint(
    payload: ProfileIn,
    db: AsyncSession = Depends(get_session),
    ctl: ProfileController = Depends(_controller),
):
    message = await _commit_or_fail(db, ctl.create(payload.to_profile()))
    return {"message": message, "profiles": list(ctl.profiles)}


# ---------------------------
# PUT /api/profiles/{id}/
# ---------------------------
@router.put("/{profile_id}/", response_model=ProfileActionOut)
async def update_profile_endpoint(
    profile_id: str,
    payload: ProfileIn,
    db: AsyncSession = Depends(get_session),
    ctl: ProfileController = Depends(_controller),
):
    message = await _commit_or_fail(db, ctl.update(payload.to_profile(profile_id)))
    # el update no toca el store; devolvemos lo que quedó en la DB
    try:
        await ctl.reload()
    except ProfileError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": message, "profiles": list(ctl.profiles)}


# ---------------------------
# POST /api/profiles/{id}/choose/
# ---------------------------
@router.post("/{profile_id}/choose/", response_model=ProfileActionOut)
async def choose_profile_endpoint(
    profile_id: str,
    db: AsyncSession = Depends(get_session),
    ctl: ProfileController = Depends(_controller),
):
    message = await _commit_or_fail(db, ctl.choose_active(profile_id))
    return {"message": message, "profiles": list(ctl.profiles)}


# ---------------------------
# DELETE /api/profiles/{id}/
# ---------------------------
@router.delete("/{profile_id}/", response_model=ProfileActionOut)
async def delete_profile_endpoint(
    profile_id: str,
    db: AsyncSession = Depends(get_session),
    ctl: ProfileController = Depends(_controller),
):
    message = await _commit_or_fail(db, ctl.delete(profile_id))
    return {"message": message, "profiles": list(ctl.profiles)}
