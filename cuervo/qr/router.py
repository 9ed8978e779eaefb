# cuervo/qr/router.py
from fastapi import APIRouter, Depends

from cuervo.qr.service import QRLinkGenerator
from cuervo.users.session import AuthSession, current_session

router = APIRouter(prefix="/api/qr", tags=["qr"])


@router.get("/me/")
async def my_qr(session: AuthSession = Depends(current_session)):
    gen = QRLinkGenerator()
    qr_url = gen.generate(session.owner_id)
    return {"public_url": gen.public_url(session.owner_id), "qr_url": qr_url}
