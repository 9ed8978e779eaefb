# cuervo/public/router.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cuervo.db.session import get_session
from cuervo.profiles.repository import SqlProfileGateway
from cuervo.profiles.schemas import PublicProfileOut
from cuervo.public.resolver import PublicProfileResolver, ResolutionState

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/{owner_token}", response_model=PublicProfileOut)
async def public_profile(owner_token: str, db: AsyncSession = Depends(get_session)):
    """Lo que se ve al escanear el QR. Sin token de sesión."""
    result = await PublicProfileResolver(SqlProfileGateway(db)).resolve(owner_token)
    if result.state is not ResolutionState.FOUND:
        raise HTTPException(status_code=404, detail="Profile not found or is private.")
    prof = result.profile
    return {"title": prof.title, "description": prof.description, "data": prof.data}
